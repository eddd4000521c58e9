from rest_framework import serializers

from ward.models import ArchiveRecord, PatientRecord
from ward.serializers.fields import CleanCharField, iso


class PatientAdmitSerializer(serializers.Serializer):
    fullName = CleanCharField(source='full_name', max_length=255)
    age = serializers.IntegerField(min_value=0, max_value=150)
    gender = serializers.ChoiceField(choices=[c for c, _ in PatientRecord.GENDER_CHOICES])
    idNumber = CleanCharField(source='id_number', max_length=64, required=False, allow_blank=True)
    phone = CleanCharField(max_length=32, required=False, allow_blank=True)
    address = CleanCharField(required=False, allow_blank=True)
    emergencyContact = CleanCharField(source='emergency_contact', max_length=255, required=False, allow_blank=True)
    admissionType = serializers.ChoiceField(
        source='admission_type', choices=[c for c, _ in PatientRecord.ADMISSION_CHOICES], required=False
    )
    diagnosis = CleanCharField(max_length=255, required=False, allow_blank=True)
    operation = CleanCharField(max_length=255, required=False, allow_blank=True)
    surgeon = CleanCharField(max_length=255, required=False, allow_blank=True)
    department = CleanCharField(max_length=64)
    bedNumber = CleanCharField(source='bed_number', max_length=32, required=False, allow_blank=True)
    notes = CleanCharField(required=False, allow_blank=True)
    admissionDate = serializers.DateTimeField(source='admission_date', required=False)

    def validate_fullName(self, v):
        if not v:
            raise serializers.ValidationError('Full name must not be empty')
        return v

    def validate_department(self, v):
        if not v:
            raise serializers.ValidationError('Department must not be empty')
        return v


class PatientUpdateSerializer(PatientAdmitSerializer):
    """Partial edit; status and ownership are not accepted."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('partial', True)
        super().__init__(*args, **kwargs)


class DischargeSerializer(serializers.Serializer):
    dischargeReason = serializers.ChoiceField(choices=[c for c, _ in ArchiveRecord.REASON_CHOICES])
    notes = CleanCharField(required=False, allow_blank=True)


class PatientListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c for c, _ in PatientRecord.STATUS_CHOICES], required=False)


class BedsUpdateSerializer(serializers.Serializer):
    totalBeds = serializers.IntegerField(source='total_beds', min_value=0, required=False)
    occupiedBeds = serializers.IntegerField(source='occupied_beds', min_value=0, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('totalBeds or occupiedBeds is required')
        return attrs


def format_patient(p: PatientRecord) -> dict:
    return {
        'id': p.pk,
        'fullName': p.full_name,
        'age': p.age,
        'gender': p.gender,
        'idNumber': p.id_number,
        'phone': p.phone,
        'address': p.address,
        'emergencyContact': p.emergency_contact,
        'admissionType': p.admission_type,
        'diagnosis': p.diagnosis,
        'operation': p.operation,
        'surgeon': p.surgeon,
        'department': p.department,
        'bedNumber': p.bed_number,
        'notes': p.notes,
        'admissionDate': iso(p.admission_date),
        'status': p.status,
        'createdBy': p.created_by_id,
        'createdAt': iso(p.created_at),
        'updatedAt': iso(p.updated_at),
    }


def format_archive(r: ArchiveRecord) -> dict:
    return {
        'id': r.pk,
        'patientId': r.patient_id,
        'fullName': r.full_name,
        'age': r.age,
        'gender': r.gender,
        'diagnosis': r.diagnosis,
        'operation': r.operation,
        'surgeon': r.surgeon,
        'department': r.department,
        'admissionDate': iso(r.admission_date),
        'dischargeDate': iso(r.discharge_date),
        'dischargeReason': r.discharge_reason,
        'notes': r.notes,
        'dischargedBy': r.discharged_by_id,
    }


def format_beds(b) -> dict:
    return {
        'department': b.department,
        'totalBeds': b.total_beds,
        'occupiedBeds': b.occupied_beds,
        'availableBeds': b.available_beds,
        'overCapacity': b.over_capacity,
        'updatedAt': iso(b.updated_at),
    }
