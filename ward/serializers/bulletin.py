from rest_framework import serializers

from ward.serializers.fields import CleanCharField, iso


class AnnouncementSerializer(serializers.Serializer):
    title = CleanCharField(max_length=255)
    content = CleanCharField()

    def validate_title(self, v):
        if not v:
            raise serializers.ValidationError('Title must not be empty')
        return v


class CommentCreateSerializer(serializers.Serializer):
    newsId = serializers.IntegerField(min_value=1)
    content = CleanCharField()

    def validate_content(self, v):
        if not v:
            raise serializers.ValidationError('Comment must not be empty')
        return v


def format_announcement(a) -> dict:
    return {
        'id': a.pk,
        'title': a.title,
        'content': a.content,
        'authorId': a.author_id,
        'authorName': a.author_name,
        'createdAt': iso(a.created_at),
        'updatedAt': iso(a.updated_at),
    }


def format_comment(c) -> dict:
    return {
        'id': c.pk,
        'newsId': c.news_id,
        'content': c.content,
        'authorId': c.author_id,
        'authorName': c.author_name,
        'createdAt': iso(c.created_at),
    }
