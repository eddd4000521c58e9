from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from ward.authentication import refresh_session
from ward.models import StaffAccount
from ward.permissions import IsHeadOfDepartment, IsStaff
from ward.serializers.auth import RoleChangeSerializer, format_staff
from ward.services.audit import log_action
from ward.services.staff import change_role


@api_view(['GET'])
@permission_classes([IsStaff])
def list_users(request):
    return Response([format_staff(s) for s in StaffAccount.objects.all()])


@api_view(['PUT'])
@permission_classes([IsHeadOfDepartment])
def change_user_role(request, staff_id: int):
    s = RoleChangeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    staff = change_role(request.user, staff_id, s.validated_data['role'])
    # the head may have changed their own role
    refresh_session(request, staff)
    log_action(identity=request.user, action='change_role', object_type='staff', object_id=staff.id,
               detail={'role': staff.role})
    return Response(format_staff(staff))
