"""Follow-up notes and media attached to a patient record."""
from __future__ import annotations

import logging

from ward.exceptions import Conflict, NotFound
from ward.models import FollowupNote, MediaReference
from ward.permissions import CLINICAL_WRITERS, HEAD_ONLY, require_authenticated, require_role
from ward.services.stores import RecordStore

logger = logging.getLogger(__name__)

MEDIA_FIELDS = ('file_name', 'file_url', 'file', 'file_type', 'content_type', 'size', 'description')


class ClinicalRecords:

    def __init__(self, store: RecordStore):
        self.store = store

    def _patient(self, patient_id: int):
        patient = self.store.get_patient(patient_id)
        if patient is None:
            raise NotFound('Patient not found')
        return patient

    def add_followup(self, identity, patient_id: int, note: str) -> FollowupNote:
        identity = require_authenticated(identity)
        patient = self._patient(patient_id)
        if patient.is_archived:
            raise Conflict('Cannot add notes to an archived patient')
        followup = self.store.create_followup(
            patient_id=patient.pk,
            note=note,
            created_by_id=identity.staff_id,
            created_by_name=identity.display_name,
        )
        logger.info('followup %s added to patient %s', followup.pk, patient.pk)
        return followup

    def followups(self, identity, patient_id: int) -> list[FollowupNote]:
        require_authenticated(identity)
        return self.store.list_followups(patient_id)

    def delete_followup(self, identity, note_id: int) -> None:
        identity = require_role(identity, HEAD_ONLY)
        note = self.store.get_followup(note_id)
        if note is None:
            raise NotFound('Follow-up note not found')
        self.store.delete_followup(note)
        logger.info('followup %s deleted by staff %s', note_id, identity.staff_id)

    def attach_media(self, identity, patient_id: int, **fields) -> MediaReference:
        """Record a media reference (URL or stored upload) for a patient.

        Archived patients may still receive media such as late lab results.
        """
        identity = require_role(identity, CLINICAL_WRITERS)
        patient = self._patient(patient_id)
        fields = {k: v for k, v in fields.items() if k in MEDIA_FIELDS and v is not None}
        media = self.store.create_media(patient_id=patient.pk, uploaded_by_id=identity.staff_id, **fields)
        logger.info('media %s (%s) attached to patient %s', media.pk, media.file_type, patient.pk)
        return media

    def media(self, identity, patient_id: int) -> list[MediaReference]:
        require_authenticated(identity)
        return self.store.list_media(patient_id)

    def delete_media(self, identity, media_id: int) -> None:
        identity = require_role(identity, CLINICAL_WRITERS)
        media = self.store.get_media(media_id)
        if media is None:
            raise NotFound('Media not found')
        self.store.delete_media(media)
        logger.info('media %s deleted by staff %s', media_id, identity.staff_id)
