"""
Patient lifecycle against the in-memory record store.

No database is involved: these tests exercise the state model, the bed
counters and the unit-of-work rollback.
"""
import logging

import pytest
from django.db import DatabaseError

from ward.exceptions import Conflict, Forbidden, NotFound, Unauthenticated, ValidationFailed
from ward.models import PatientRecord
from ward.services.clinical import ClinicalRecords
from ward.services.lifecycle import PatientLifecycle
from ward.services.statistics import dashboard


def admission(**overrides):
    data = {
        'full_name': 'Amina Haddad',
        'age': 42,
        'gender': 'female',
        'admission_type': 'emergency',
        'diagnosis': 'Appendicitis',
        'department': 'general_surgery',
        'notes': 'NPO since midnight',
    }
    data.update(overrides)
    return data


def failing_store_call(*args, **kwargs):
    raise DatabaseError('database is locked')


@pytest.fixture
def lifecycle(store):
    return PatientLifecycle(store)


def test_admit_sets_status_owner_and_bed(lifecycle, store, resident):
    patient = lifecycle.admit(resident, admission())
    assert patient.status == PatientRecord.STATUS_ACTIVE
    assert patient.created_by_id == resident.staff_id
    assert patient.admission_date is not None
    assert store.get_beds('general_surgery').occupied_beds == 1


def test_admit_ignores_status_and_owner_from_payload(lifecycle, resident):
    patient = lifecycle.admit(resident, admission(status='archived', created_by_id=99))
    assert patient.status == PatientRecord.STATUS_ACTIVE
    assert patient.created_by_id == resident.staff_id


def test_surgeon_cannot_admit(lifecycle, store, surgeon):
    with pytest.raises(Forbidden):
        lifecycle.admit(surgeon, admission())
    assert store.list_patients() == []
    assert store.get_beds('general_surgery') is None


def test_anonymous_cannot_admit(lifecycle):
    with pytest.raises(Unauthenticated):
        lifecycle.admit(None, admission())


def test_admit_over_capacity_is_reported_not_rejected(lifecycle, store, head, caplog):
    store.save_beds('orthopedics', total_beds=1)
    lifecycle.admit(head, admission(department='orthopedics'))
    with caplog.at_level(logging.WARNING, logger='ward.services.lifecycle'):
        lifecycle.admit(head, admission(full_name='Omar Saleh', department='orthopedics'))
    beds = store.get_beds('orthopedics')
    assert beds.occupied_beds == 2
    assert beds.over_capacity
    assert beds.available_beds == 0
    assert 'over capacity' in caplog.text


def test_discharge_archives_snapshot_and_frees_bed(lifecycle, store, resident):
    patient = lifecycle.admit(resident, admission())
    record = lifecycle.discharge(resident, patient.pk, 'improved')

    assert record.patient_id == patient.pk
    assert record.full_name == 'Amina Haddad'
    assert record.discharge_reason == 'improved'
    assert record.notes == 'NPO since midnight'
    assert record.discharged_by_id == resident.staff_id
    assert store.get_patient(patient.pk).status == PatientRecord.STATUS_ARCHIVED
    assert store.get_beds('general_surgery').occupied_beds == 0
    assert len(store.list_archive()) == 1


def test_discharge_notes_override_patient_notes(lifecycle, resident):
    patient = lifecycle.admit(resident, admission())
    record = lifecycle.discharge(resident, patient.pk, 'by_request', notes='Left against advice')
    assert record.notes == 'Left against advice'


def test_second_discharge_conflicts(lifecycle, store, head):
    patient = lifecycle.admit(head, admission())
    lifecycle.discharge(head, patient.pk, 'died')
    with pytest.raises(Conflict):
        lifecycle.discharge(head, patient.pk, 'improved')
    assert len(store.list_archive()) == 1
    assert store.get_beds('general_surgery').occupied_beds == 0


def test_discharge_rejects_unknown_reason(lifecycle, resident):
    patient = lifecycle.admit(resident, admission())
    with pytest.raises(ValidationFailed) as exc:
        lifecycle.discharge(resident, patient.pk, 'transferred')
    assert exc.value.field == 'dischargeReason'


def test_discharge_missing_patient(lifecycle, resident):
    with pytest.raises(NotFound):
        lifecycle.discharge(resident, 404, 'improved')


def test_surgeon_cannot_discharge(lifecycle, store, resident, surgeon):
    patient = lifecycle.admit(resident, admission())
    with pytest.raises(Forbidden):
        lifecycle.discharge(surgeon, patient.pk, 'improved')
    assert store.get_patient(patient.pk).status == PatientRecord.STATUS_ACTIVE


def test_discharge_rolls_back_when_store_fails(lifecycle, store, resident, monkeypatch):
    patient = lifecycle.admit(resident, admission())

    monkeypatch.setattr(store, 'adjust_beds', failing_store_call)
    with pytest.raises(DatabaseError):
        lifecycle.discharge(resident, patient.pk, 'improved')

    assert store.get_patient(patient.pk).status == PatientRecord.STATUS_ACTIVE
    assert store.list_archive() == []
    assert store.get_beds('general_surgery').occupied_beds == 1


def test_admit_rolls_back_when_bed_update_fails(lifecycle, store, resident, monkeypatch):
    monkeypatch.setattr(store, 'adjust_beds', failing_store_call)
    with pytest.raises(DatabaseError):
        lifecycle.admit(resident, admission())
    assert store.list_patients() == []


def test_update_keeps_status_and_owner(lifecycle, store, resident, surgeon):
    patient = lifecycle.admit(resident, admission())
    updated = lifecycle.update(surgeon, patient.pk, {
        'diagnosis': 'Perforated appendix', 'status': 'archived', 'created_by_id': surgeon.staff_id,
    })
    assert updated.diagnosis == 'Perforated appendix'
    assert updated.status == PatientRecord.STATUS_ACTIVE
    assert updated.created_by_id == resident.staff_id


def test_update_moves_bed_of_active_patient(lifecycle, store, resident):
    patient = lifecycle.admit(resident, admission())
    lifecycle.update(resident, patient.pk, {'department': 'orthopedics'})
    assert store.get_beds('general_surgery').occupied_beds == 0
    assert store.get_beds('orthopedics').occupied_beds == 1


def test_update_department_of_archived_patient_leaves_beds(lifecycle, store, resident):
    patient = lifecycle.admit(resident, admission())
    lifecycle.discharge(resident, patient.pk, 'improved')
    lifecycle.update(resident, patient.pk, {'department': 'orthopedics'})
    assert store.get_beds('general_surgery').occupied_beds == 0
    assert store.get_beds('orthopedics') is None


def test_update_missing_patient(lifecycle, surgeon):
    with pytest.raises(NotFound):
        lifecycle.update(surgeon, 12, {'notes': 'x'})


def test_only_head_deletes_and_history_is_kept(lifecycle, store, resident, head):
    patient = lifecycle.admit(resident, admission())
    ClinicalRecords(store).add_followup(resident, patient.pk, 'Day 1: stable')
    lifecycle.discharge(resident, patient.pk, 'improved')

    with pytest.raises(Forbidden):
        lifecycle.delete(resident, patient.pk)
    lifecycle.delete(head, patient.pk)

    assert store.get_patient(patient.pk) is None
    assert len(store.list_archive()) == 1
    assert len(store.list_followups(patient.pk)) == 1
    with pytest.raises(NotFound):
        lifecycle.delete(head, patient.pk)


def test_delete_does_not_touch_beds(lifecycle, store, head):
    patient = lifecycle.admit(head, admission())
    lifecycle.delete(head, patient.pk)
    assert store.get_beds('general_surgery').occupied_beds == 1


def test_bed_counter_never_negative(store):
    assert store.adjust_beds('pediatrics', -1).occupied_beds == 0


def test_unknown_department_beds_read_as_zero(lifecycle, surgeon):
    beds = lifecycle.beds(surgeon, 'radiology')
    assert (beds.total_beds, beds.occupied_beds, beds.available_beds) == (0, 0, 0)


def test_set_beds_head_only(lifecycle, store, resident, head):
    with pytest.raises(Forbidden):
        lifecycle.set_beds(resident, 'cardiology', total_beds=12)
    beds = lifecycle.set_beds(head, 'cardiology', total_beds=12)
    assert beds.total_beds == 12
    assert store.get_beds('cardiology').available_beds == 12


def test_followups_rejected_for_archived_patient(lifecycle, store, resident, surgeon, head):
    clinical = ClinicalRecords(store)
    patient = lifecycle.admit(resident, admission())
    note = clinical.add_followup(surgeon, patient.pk, 'Wound clean')
    assert note.created_by_name == surgeon.display_name

    lifecycle.discharge(resident, patient.pk, 'improved')
    with pytest.raises(Conflict):
        clinical.add_followup(surgeon, patient.pk, 'Too late')
    with pytest.raises(Forbidden):
        clinical.delete_followup(surgeon, note.pk)
    clinical.delete_followup(head, note.pk)
    assert clinical.followups(surgeon, patient.pk) == []


def test_media_writers(lifecycle, store, resident, surgeon):
    clinical = ClinicalRecords(store)
    patient = lifecycle.admit(resident, admission())
    with pytest.raises(Forbidden):
        clinical.attach_media(surgeon, patient.pk, file_name='xray.png', file_url='https://files/xray.png')
    media = clinical.attach_media(resident, patient.pk, file_name='xray.png', file_url='https://files/xray.png')
    assert [m.pk for m in clinical.media(surgeon, patient.pk)] == [media.pk]
    with pytest.raises(NotFound):
        clinical.attach_media(resident, 999, file_name='x.png', file_url='https://files/x.png')


def test_dashboard_counts(lifecycle, store, resident):
    first = lifecycle.admit(resident, admission())
    lifecycle.admit(resident, admission(full_name='Omar Saleh', admission_type='operation',
                                        department='orthopedics', diagnosis='Fracture'))
    lifecycle.admit(resident, admission(full_name='Lina Aziz'))
    lifecycle.discharge(resident, first.pk, 'escaped')

    stats = dashboard(resident, store)
    assert stats['totalPatients'] == 3
    assert stats['activePatients'] == 2
    assert stats['archivedPatients'] == 1
    assert stats['emergencyCases'] == 1
    assert stats['todayOperations'] == 1
    assert {'department': 'general_surgery', 'count': 2} in stats['patientsByDepartment']
    assert {'diagnosis': 'Appendicitis', 'count': 2} in stats['patientsByDiagnosis']
    assert stats['dischargeReasons'] == {'improved': 0, 'by_request': 0, 'escaped': 1, 'died': 0}
