"""
Patient record endpoints.

Thin HTTP adapters over :class:`~ward.services.lifecycle.PatientLifecycle`:
they validate the payload, hand the session identity to the service and
format the result.  Role checks live in the service.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.models import PatientRecord
from ward.permissions import CLINICAL_WRITERS, IsResidentOrHead, IsStaff, require_role
from ward.serializers.patient import (
    DischargeSerializer,
    PatientAdmitSerializer,
    PatientListQuerySerializer,
    PatientUpdateSerializer,
    format_archive,
    format_patient,
)
from ward.services.audit import log_action
from ward.services.lifecycle import PatientLifecycle
from ward.services.stores import get_record_store


def _lifecycle() -> PatientLifecycle:
    return PatientLifecycle(get_record_store())


@api_view(['GET', 'POST'])
@permission_classes([IsStaff])
def patients(request):
    lifecycle = _lifecycle()
    if request.method == 'GET':
        q = PatientListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        rows = lifecycle.list_patients(request.user, status=q.validated_data.get('status'))
        return Response([format_patient(p) for p in rows])

    require_role(request.user, CLINICAL_WRITERS)
    s = PatientAdmitSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = lifecycle.admit(request.user, s.validated_data)
    log_action(identity=request.user, action='admit', object_type='patient', object_id=patient.pk,
               detail={'department': patient.department})
    return Response(format_patient(patient), status=201)


@api_view(['GET'])
@permission_classes([IsStaff])
def active_patients(request):
    rows = _lifecycle().list_patients(request.user, status=PatientRecord.STATUS_ACTIVE)
    return Response([format_patient(p) for p in rows])


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsStaff])
def patient_detail(request, patient_id: int):
    lifecycle = _lifecycle()
    if request.method == 'GET':
        return Response(format_patient(lifecycle.get(request.user, patient_id)))

    if request.method == 'DELETE':
        lifecycle.delete(request.user, patient_id)
        log_action(identity=request.user, action='delete_patient', object_type='patient', object_id=patient_id)
        return Response(status=204)

    s = PatientUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    patient = lifecycle.update(request.user, patient_id, s.validated_data)
    return Response(format_patient(patient))


@api_view(['POST'])
@permission_classes([IsResidentOrHead])
def discharge_patient(request, patient_id: int):
    s = DischargeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    record = _lifecycle().discharge(
        request.user, patient_id, s.validated_data['dischargeReason'], s.validated_data.get('notes')
    )
    log_action(identity=request.user, action='discharge', object_type='patient', object_id=patient_id,
               detail={'reason': record.discharge_reason, 'archiveId': record.pk})
    return Response(format_archive(record))
