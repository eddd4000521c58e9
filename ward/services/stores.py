"""
Record stores used by the ward services.

:class:`RecordStore` is the persistence interface the lifecycle, clinical
and bulletin services are written against.  :class:`DjangoRecordStore`
goes through the ORM and is what the API uses; :class:`InMemoryRecordStore`
keeps unsaved model instances in dictionaries and is meant for unit tests.
Both return the same model classes, so callers and serializers do not
care which one they were given.

Every multi-step change must run inside ``store.atomic()``: either all of
its writes become visible or none do.
"""
from __future__ import annotations

import abc
import copy
import itertools
from contextlib import contextmanager
from typing import Iterator, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from django.utils.module_loading import import_string

from ..models import (
    Announcement,
    ArchiveRecord,
    Comment,
    DepartmentBeds,
    FollowupNote,
    MediaReference,
    PatientRecord,
)


class RecordStore(abc.ABC):

    @abc.abstractmethod
    def atomic(self):
        """Context manager grouping writes into one unit of work."""

    # -- patients ---------------------------------------------------------
    @abc.abstractmethod
    def create_patient(self, **fields) -> PatientRecord: ...

    @abc.abstractmethod
    def get_patient(self, patient_id: int, *, for_update: bool = False) -> Optional[PatientRecord]: ...

    @abc.abstractmethod
    def list_patients(self, status: Optional[str] = None) -> list[PatientRecord]: ...

    @abc.abstractmethod
    def save_patient(self, patient: PatientRecord, fields: list[str]) -> PatientRecord: ...

    @abc.abstractmethod
    def delete_patient(self, patient: PatientRecord) -> None: ...

    # -- archive ----------------------------------------------------------
    @abc.abstractmethod
    def create_archive(self, **fields) -> ArchiveRecord: ...

    @abc.abstractmethod
    def list_archive(self) -> list[ArchiveRecord]: ...

    # -- beds -------------------------------------------------------------
    @abc.abstractmethod
    def get_beds(self, department: str) -> Optional[DepartmentBeds]: ...

    @abc.abstractmethod
    def adjust_beds(self, department: str, delta: int) -> DepartmentBeds:
        """Add ``delta`` to the occupied beds of ``department``, floored at 0.

        Creates the counter (zero total beds) when the department has none.
        """

    @abc.abstractmethod
    def save_beds(self, department: str, **values) -> DepartmentBeds:
        """Create or update the counter of ``department`` with ``values``."""

    # -- follow-up notes --------------------------------------------------
    @abc.abstractmethod
    def create_followup(self, **fields) -> FollowupNote: ...

    @abc.abstractmethod
    def get_followup(self, note_id: int) -> Optional[FollowupNote]: ...

    @abc.abstractmethod
    def list_followups(self, patient_id: int) -> list[FollowupNote]: ...

    @abc.abstractmethod
    def delete_followup(self, note: FollowupNote) -> None: ...

    # -- media ------------------------------------------------------------
    @abc.abstractmethod
    def create_media(self, **fields) -> MediaReference: ...

    @abc.abstractmethod
    def get_media(self, media_id: int) -> Optional[MediaReference]: ...

    @abc.abstractmethod
    def list_media(self, patient_id: int) -> list[MediaReference]: ...

    @abc.abstractmethod
    def delete_media(self, media: MediaReference) -> None: ...

    # -- bulletin ---------------------------------------------------------
    @abc.abstractmethod
    def create_announcement(self, **fields) -> Announcement: ...

    @abc.abstractmethod
    def get_announcement(self, news_id: int) -> Optional[Announcement]: ...

    @abc.abstractmethod
    def list_announcements(self) -> list[Announcement]: ...

    @abc.abstractmethod
    def save_announcement(self, announcement: Announcement, fields: list[str]) -> Announcement: ...

    @abc.abstractmethod
    def delete_announcement(self, announcement: Announcement) -> None:
        """Delete the announcement; callers remove its comments first."""

    @abc.abstractmethod
    def create_comment(self, **fields) -> Comment: ...

    @abc.abstractmethod
    def get_comment(self, comment_id: int) -> Optional[Comment]: ...

    @abc.abstractmethod
    def list_comments(self, news_id: int) -> list[Comment]: ...

    @abc.abstractmethod
    def delete_comment(self, comment: Comment) -> None: ...

    @abc.abstractmethod
    def delete_comments_of(self, news_id: int) -> int: ...


class DjangoRecordStore(RecordStore):
    """ORM backed store.  ``for_update`` reads lock the row until commit."""

    def atomic(self):
        return transaction.atomic()

    def create_patient(self, **fields):
        return PatientRecord.objects.create(**fields)

    def get_patient(self, patient_id, *, for_update=False):
        qs = PatientRecord.objects.all()
        if for_update:
            qs = qs.select_for_update()
        return qs.filter(pk=patient_id).first()

    def list_patients(self, status=None):
        qs = PatientRecord.objects.all()
        if status:
            qs = qs.filter(status=status)
        return list(qs)

    def save_patient(self, patient, fields):
        patient.save(update_fields=sorted(set(fields) | {'updated_at'}))
        return patient

    def delete_patient(self, patient):
        patient.delete()

    def create_archive(self, **fields):
        return ArchiveRecord.objects.create(**fields)

    def list_archive(self):
        return list(ArchiveRecord.objects.all())

    def get_beds(self, department):
        return DepartmentBeds.objects.filter(department=department).first()

    def adjust_beds(self, department, delta):
        with transaction.atomic():
            beds, _ = DepartmentBeds.objects.select_for_update().get_or_create(
                department=department, defaults={'total_beds': 0, 'occupied_beds': 0}
            )
            beds.occupied_beds = max(beds.occupied_beds + delta, 0)
            beds.save(update_fields=['occupied_beds', 'updated_at'])
        return beds

    def save_beds(self, department, **values):
        with transaction.atomic():
            beds, _ = DepartmentBeds.objects.select_for_update().get_or_create(
                department=department, defaults={'total_beds': 0, 'occupied_beds': 0}
            )
            for key, value in values.items():
                setattr(beds, key, value)
            beds.save()
        return beds

    def create_followup(self, **fields):
        return FollowupNote.objects.create(**fields)

    def get_followup(self, note_id):
        return FollowupNote.objects.filter(pk=note_id).first()

    def list_followups(self, patient_id):
        return list(FollowupNote.objects.filter(patient_id=patient_id))

    def delete_followup(self, note):
        note.delete()

    def create_media(self, **fields):
        return MediaReference.objects.create(**fields)

    def get_media(self, media_id):
        return MediaReference.objects.filter(pk=media_id).first()

    def list_media(self, patient_id):
        return list(MediaReference.objects.filter(patient_id=patient_id))

    def delete_media(self, media):
        if media.file:
            media.file.delete(save=False)
        media.delete()

    def create_announcement(self, **fields):
        return Announcement.objects.create(**fields)

    def get_announcement(self, news_id):
        return Announcement.objects.filter(pk=news_id).first()

    def list_announcements(self):
        return list(Announcement.objects.all())

    def save_announcement(self, announcement, fields):
        announcement.save(update_fields=sorted(set(fields) | {'updated_at'}))
        return announcement

    def delete_announcement(self, announcement):
        announcement.delete()

    def create_comment(self, **fields):
        return Comment.objects.create(**fields)

    def get_comment(self, comment_id):
        return Comment.objects.filter(pk=comment_id).first()

    def list_comments(self, news_id):
        return list(Comment.objects.filter(news_id=news_id))

    def delete_comment(self, comment):
        comment.delete()

    def delete_comments_of(self, news_id):
        deleted, _ = Comment.objects.filter(news_id=news_id).delete()
        return deleted


class InMemoryRecordStore(RecordStore):
    """Dictionary backed store for tests.

    Instances are never saved to a database.  ``atomic()`` snapshots every
    table and restores the snapshot if the block raises.
    """

    _TABLES = ('patients', 'archive', 'beds', 'followups', 'media', 'news', 'comments')

    def __init__(self):
        self._tables: dict[str, dict] = {name: {} for name in self._TABLES}
        self._ids = {name: itertools.count(1) for name in self._TABLES}

    @contextmanager
    def atomic(self) -> Iterator[None]:
        snapshot = {
            name: {key: copy.copy(obj) for key, obj in rows.items()}
            for name, rows in self._tables.items()
        }
        try:
            yield
        except BaseException:
            self._tables = snapshot
            raise

    def _insert(self, table: str, model, fields: dict, *, key=None):
        obj = model(**fields)
        obj.pk = next(self._ids[table])
        now = timezone.now()
        for name in ('created_at', 'updated_at', 'discharge_date'):
            if hasattr(obj, name) and getattr(obj, name) is None:
                setattr(obj, name, now)
        self._tables[table][obj.pk if key is None else key] = obj
        return obj

    @staticmethod
    def _newest_first(rows, attr):
        return sorted(rows, key=lambda o: (getattr(o, attr), o.pk), reverse=True)

    def create_patient(self, **fields):
        fields.setdefault('admission_date', timezone.now())
        return self._insert('patients', PatientRecord, fields)

    def get_patient(self, patient_id, *, for_update=False):
        return self._tables['patients'].get(patient_id)

    def list_patients(self, status=None):
        rows = [p for p in self._tables['patients'].values() if not status or p.status == status]
        return self._newest_first(rows, 'admission_date')

    def save_patient(self, patient, fields):
        patient.updated_at = timezone.now()
        self._tables['patients'][patient.pk] = patient
        return patient

    def delete_patient(self, patient):
        self._tables['patients'].pop(patient.pk, None)

    def create_archive(self, **fields):
        return self._insert('archive', ArchiveRecord, fields)

    def list_archive(self):
        return self._newest_first(self._tables['archive'].values(), 'discharge_date')

    def get_beds(self, department):
        return self._tables['beds'].get(department)

    def adjust_beds(self, department, delta):
        beds = self._tables['beds'].get(department)
        if beds is None:
            beds = self._insert('beds', DepartmentBeds,
                                {'department': department, 'total_beds': 0, 'occupied_beds': 0}, key=department)
        beds.occupied_beds = max(beds.occupied_beds + delta, 0)
        beds.updated_at = timezone.now()
        return beds

    def save_beds(self, department, **values):
        beds = self._tables['beds'].get(department)
        if beds is None:
            beds = self._insert('beds', DepartmentBeds,
                                {'department': department, 'total_beds': 0, 'occupied_beds': 0}, key=department)
        for key, value in values.items():
            setattr(beds, key, value)
        beds.updated_at = timezone.now()
        return beds

    def create_followup(self, **fields):
        return self._insert('followups', FollowupNote, fields)

    def get_followup(self, note_id):
        return self._tables['followups'].get(note_id)

    def list_followups(self, patient_id):
        rows = [n for n in self._tables['followups'].values() if n.patient_id == patient_id]
        return self._newest_first(rows, 'created_at')

    def delete_followup(self, note):
        self._tables['followups'].pop(note.pk, None)

    def create_media(self, **fields):
        return self._insert('media', MediaReference, fields)

    def get_media(self, media_id):
        return self._tables['media'].get(media_id)

    def list_media(self, patient_id):
        rows = [m for m in self._tables['media'].values() if m.patient_id == patient_id]
        return self._newest_first(rows, 'created_at')

    def delete_media(self, media):
        self._tables['media'].pop(media.pk, None)

    def create_announcement(self, **fields):
        return self._insert('news', Announcement, fields)

    def get_announcement(self, news_id):
        return self._tables['news'].get(news_id)

    def list_announcements(self):
        return self._newest_first(self._tables['news'].values(), 'created_at')

    def save_announcement(self, announcement, fields):
        announcement.updated_at = timezone.now()
        return announcement

    def delete_announcement(self, announcement):
        self._tables['news'].pop(announcement.pk, None)

    def create_comment(self, **fields):
        return self._insert('comments', Comment, fields)

    def get_comment(self, comment_id):
        return self._tables['comments'].get(comment_id)

    def list_comments(self, news_id):
        rows = [c for c in self._tables['comments'].values() if c.news_id == news_id]
        return sorted(rows, key=lambda c: (c.created_at, c.pk))

    def delete_comment(self, comment):
        self._tables['comments'].pop(comment.pk, None)

    def delete_comments_of(self, news_id):
        doomed = [pk for pk, c in self._tables['comments'].items() if c.news_id == news_id]
        for pk in doomed:
            del self._tables['comments'][pk]
        return len(doomed)


def get_record_store() -> RecordStore:
    """Instantiate the store configured by ``settings.WARD_RECORD_STORE``."""
    return import_string(settings.WARD_RECORD_STORE)()
