from collections import Counter
from typing import Any, Dict

from django.utils import timezone

from ward.models import ArchiveRecord, PatientRecord
from ward.permissions import require_authenticated
from ward.services.stores import RecordStore


def dashboard(identity, store: RecordStore) -> Dict[str, Any]:
    """Ward overview shown on the control panel."""
    require_authenticated(identity)
    patients = store.list_patients()
    archived = store.list_archive()
    active = [p for p in patients if p.status == PatientRecord.STATUS_ACTIVE]
    today = timezone.localdate()

    by_department = Counter(p.department for p in patients)
    by_diagnosis = Counter(p.diagnosis for p in patients if p.diagnosis)
    reasons = {value: 0 for value, _ in ArchiveRecord.REASON_CHOICES}
    for record in archived:
        if record.discharge_reason in reasons:
            reasons[record.discharge_reason] += 1

    return {
        'totalPatients': len(patients),
        'activePatients': len(active),
        'archivedPatients': len(archived),
        'emergencyCases': sum(1 for p in active if p.admission_type == 'emergency'),
        'todayOperations': sum(
            1 for p in active
            if p.admission_type == 'operation' and timezone.localdate(p.admission_date) == today
        ),
        'patientsByDepartment': [{'department': d, 'count': c} for d, c in by_department.items()],
        'patientsByDiagnosis': [{'diagnosis': d, 'count': c} for d, c in by_diagnosis.items()],
        'dischargeReasons': reasons,
    }
