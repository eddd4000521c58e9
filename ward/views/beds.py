from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.permissions import HEAD_ONLY, IsStaff, require_role
from ward.serializers.patient import BedsUpdateSerializer, format_beds
from ward.services.lifecycle import PatientLifecycle
from ward.services.stores import get_record_store


@api_view(['GET', 'PUT'])
@permission_classes([IsStaff])
def department_beds(request, department: str):
    """Occupancy of one department.  Only the head of department may set it."""
    lifecycle = PatientLifecycle(get_record_store())
    if request.method == 'GET':
        return Response(format_beds(lifecycle.beds(request.user, department)))

    require_role(request.user, HEAD_ONLY)
    s = BedsUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    beds = lifecycle.set_beds(request.user, department, **s.validated_data)
    return Response(format_beds(beds))
