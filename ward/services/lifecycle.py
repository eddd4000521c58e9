"""
Patient lifecycle: admission, edits, discharge and deletion.

Every operation takes the acting :class:`~ward.authentication.SessionIdentity`
explicitly and checks it against the access gate before touching the store.
Multi-step changes (patient row, archive snapshot, bed counters) run in a
single ``store.atomic()`` block so a failure leaves nothing half applied.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.utils import timezone

from ward.exceptions import Conflict, NotFound, ValidationFailed
from ward.models import ArchiveRecord, DepartmentBeds, PatientRecord
from ward.permissions import CLINICAL_WRITERS, HEAD_ONLY, require_authenticated, require_role
from ward.services.stores import RecordStore

logger = logging.getLogger(__name__)

ADMIT_FIELDS = (
    'full_name', 'age', 'gender', 'id_number', 'phone', 'address', 'emergency_contact',
    'admission_type', 'diagnosis', 'operation', 'surgeon', 'department', 'bed_number',
    'notes', 'admission_date',
)
# status only changes through discharge; ownership never changes
UPDATABLE_FIELDS = tuple(f for f in ADMIT_FIELDS if f != 'admission_date')
DISCHARGE_REASONS = tuple(value for value, _ in ArchiveRecord.REASON_CHOICES)


class PatientLifecycle:

    def __init__(self, store: RecordStore):
        self.store = store

    # -- reads ------------------------------------------------------------
    def get(self, identity, patient_id: int) -> PatientRecord:
        require_authenticated(identity)
        patient = self.store.get_patient(patient_id)
        if patient is None:
            raise NotFound('Patient not found')
        return patient

    def list_patients(self, identity, status: Optional[str] = None) -> list[PatientRecord]:
        require_authenticated(identity)
        return self.store.list_patients(status=status)

    def archive(self, identity) -> list[ArchiveRecord]:
        require_authenticated(identity)
        return self.store.list_archive()

    def beds(self, identity, department: str) -> DepartmentBeds:
        """Counter of ``department``; an unknown department reads as all zeros."""
        require_authenticated(identity)
        beds = self.store.get_beds(department)
        if beds is None:
            beds = DepartmentBeds(department=department, total_beds=0, occupied_beds=0)
        return beds

    # -- writes -----------------------------------------------------------
    def admit(self, identity, data: dict) -> PatientRecord:
        identity = require_role(identity, CLINICAL_WRITERS)
        fields = {k: v for k, v in data.items() if k in ADMIT_FIELDS and v is not None}
        if not fields.get('department'):
            raise ValidationFailed('department: This field is required.', field='department')
        fields.setdefault('admission_date', timezone.now())

        with self.store.atomic():
            patient = self.store.create_patient(
                status=PatientRecord.STATUS_ACTIVE, created_by_id=identity.staff_id, **fields
            )
            beds = self.store.adjust_beds(patient.department, +1)

        logger.info('patient %s admitted to %s by staff %s', patient.pk, patient.department, identity.staff_id)
        if beds.over_capacity:
            logger.warning('department %s over capacity: %s/%s beds occupied',
                           beds.department, beds.occupied_beds, beds.total_beds)
        return patient

    def update(self, identity, patient_id: int, changes: dict) -> PatientRecord:
        """Apply a partial edit.

        Moving an active patient to another department moves its bed too.
        """
        identity = require_authenticated(identity)
        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}

        with self.store.atomic():
            patient = self.store.get_patient(patient_id, for_update=True)
            if patient is None:
                raise NotFound('Patient not found')
            old_department = patient.department
            for key, value in changes.items():
                setattr(patient, key, value)
            moved = (
                'department' in changes
                and patient.department != old_department
                and patient.status == PatientRecord.STATUS_ACTIVE
            )
            if moved:
                self.store.adjust_beds(old_department, -1)
                self.store.adjust_beds(patient.department, +1)
            self.store.save_patient(patient, list(changes))

        logger.info('patient %s updated by staff %s: %s', patient.pk, identity.staff_id, sorted(changes))
        return patient

    def discharge(self, identity, patient_id: int, reason: str, notes: Optional[str] = None) -> ArchiveRecord:
        identity = require_role(identity, CLINICAL_WRITERS)
        if reason not in DISCHARGE_REASONS:
            raise ValidationFailed(
                f"dischargeReason: must be one of {', '.join(DISCHARGE_REASONS)}", field='dischargeReason'
            )

        with self.store.atomic():
            patient = self.store.get_patient(patient_id, for_update=True)
            if patient is None:
                raise NotFound('Patient not found')
            if patient.is_archived:
                raise Conflict('Patient is already archived')

            record = self.store.create_archive(
                patient_id=patient.pk,
                full_name=patient.full_name,
                age=patient.age,
                gender=patient.gender,
                diagnosis=patient.diagnosis,
                operation=patient.operation,
                surgeon=patient.surgeon,
                department=patient.department,
                admission_date=patient.admission_date,
                discharge_reason=reason,
                notes=notes if notes else patient.notes,
                discharged_by_id=identity.staff_id,
            )
            patient.status = PatientRecord.STATUS_ARCHIVED
            self.store.save_patient(patient, ['status'])
            if patient.department:
                self.store.adjust_beds(patient.department, -1)

        logger.info('patient %s discharged (%s) by staff %s', patient.pk, reason, identity.staff_id)
        return record

    def delete(self, identity, patient_id: int) -> PatientRecord:
        """Remove the patient row only; archive, notes and media stay."""
        identity = require_role(identity, HEAD_ONLY)
        with self.store.atomic():
            patient = self.store.get_patient(patient_id, for_update=True)
            if patient is None:
                raise NotFound('Patient not found')
            self.store.delete_patient(patient)
        logger.warning('patient %s deleted by staff %s', patient_id, identity.staff_id)
        return patient

    def set_beds(self, identity, department: str, **values) -> DepartmentBeds:
        identity = require_role(identity, HEAD_ONLY)
        values = {k: v for k, v in values.items() if k in ('total_beds', 'occupied_beds') and v is not None}
        with self.store.atomic():
            beds = self.store.save_beds(department, **values)
        logger.info('beds of %s set to %s/%s by staff %s',
                    department, beds.occupied_beds, beds.total_beds, identity.staff_id)
        return beds
