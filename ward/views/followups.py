from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import IsHeadOfDepartment, IsStaff
from ward.serializers.clinical import FollowupCreateSerializer, format_followup
from ward.services.clinical import ClinicalRecords
from ward.services.stores import get_record_store


@api_view(['POST'])
@permission_classes([IsStaff])
def create_followup(request):
    s = FollowupCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    note = ClinicalRecords(get_record_store()).add_followup(
        request.user, s.validated_data['patientId'], s.validated_data['note']
    )
    return Response(format_followup(note), status=201)


@api_view(['GET'])
@permission_classes([IsStaff])
def patient_followups(request, patient_id: int):
    notes = ClinicalRecords(get_record_store()).followups(request.user, patient_id)
    return Response([format_followup(n) for n in notes])


@api_view(['DELETE'])
@permission_classes([IsHeadOfDepartment])
def delete_followup(request, note_id: int):
    ClinicalRecords(get_record_store()).delete_followup(request.user, note_id)
    return Response(status=204)
