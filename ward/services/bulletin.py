"""
Staff bulletin board: announcements ("news") and their comments.

Anyone logged in may publish or comment.  Changing or removing an item is
reserved to its author and the head of department.
"""
from __future__ import annotations

import logging

from ward.exceptions import NotFound
from ward.models import Announcement, Comment
from ward.permissions import can_modify_resource, require_authenticated
from ward.services.stores import RecordStore

logger = logging.getLogger(__name__)


class Bulletin:

    def __init__(self, store: RecordStore):
        self.store = store

    def _announcement(self, news_id: int) -> Announcement:
        announcement = self.store.get_announcement(news_id)
        if announcement is None:
            raise NotFound('Announcement not found')
        return announcement

    def announcements(self, identity) -> list[Announcement]:
        require_authenticated(identity)
        return self.store.list_announcements()

    def get(self, identity, news_id: int) -> Announcement:
        require_authenticated(identity)
        return self._announcement(news_id)

    def publish(self, identity, title: str, content: str) -> Announcement:
        identity = require_authenticated(identity)
        announcement = self.store.create_announcement(
            title=title, content=content, author_id=identity.staff_id, author_name=identity.display_name
        )
        logger.info('announcement %s published by staff %s', announcement.pk, identity.staff_id)
        return announcement

    def modify(self, identity, news_id: int, **changes) -> Announcement:
        require_authenticated(identity)
        announcement = self._announcement(news_id)
        can_modify_resource(identity, announcement.author_id)
        changes = {k: v for k, v in changes.items() if k in ('title', 'content') and v is not None}
        for key, value in changes.items():
            setattr(announcement, key, value)
        return self.store.save_announcement(announcement, list(changes))

    def delete(self, identity, news_id: int) -> int:
        """Delete an announcement and all of its comments; returns the comment count removed."""
        require_authenticated(identity)
        announcement = self._announcement(news_id)
        identity = can_modify_resource(identity, announcement.author_id)
        with self.store.atomic():
            removed = self.store.delete_comments_of(announcement.pk)
            self.store.delete_announcement(announcement)
        logger.info('announcement %s deleted by staff %s with %d comments', news_id, identity.staff_id, removed)
        return removed

    def comments(self, identity, news_id: int) -> list[Comment]:
        require_authenticated(identity)
        return self.store.list_comments(news_id)

    def post_comment(self, identity, news_id: int, content: str) -> Comment:
        identity = require_authenticated(identity)
        announcement = self._announcement(news_id)
        return self.store.create_comment(
            news_id=announcement.pk, content=content,
            author_id=identity.staff_id, author_name=identity.display_name,
        )

    def delete_comment(self, identity, comment_id: int) -> None:
        require_authenticated(identity)
        comment = self.store.get_comment(comment_id)
        if comment is None:
            raise NotFound('Comment not found')
        identity = can_modify_resource(identity, comment.author_id)
        self.store.delete_comment(comment)
        logger.info('comment %s deleted by staff %s', comment_id, identity.staff_id)
