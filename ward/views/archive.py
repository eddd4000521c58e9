from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import IsStaff
from ward.serializers.patient import format_archive
from ward.services.lifecycle import PatientLifecycle
from ward.services.stores import get_record_store


@api_view(['GET'])
@permission_classes([IsStaff])
def archive_list(request):
    records = PatientLifecycle(get_record_store()).archive(request.user)
    return Response([format_archive(r) for r in records])
