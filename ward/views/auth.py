"""
Staff registration, login, logout and the current identity.

The session cookie is the only credential.  Login and registration bind
the account to a fresh session key; logout destroys the session.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ward.authentication import end_session, start_session
from ward.exceptions import Unauthenticated
from ward.models import StaffAccount
from ward.permissions import IsStaff
from ward.serializers.auth import LoginSerializer, RegisterSerializer, format_identity, format_staff
from ward.services.audit import log_action
from ward.services.staff import authenticate_staff, register_staff
from ward.throttling import LoginRateThrottle, SignupRateThrottle


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([SignupRateThrottle])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    staff = register_staff(**s.validated_data)
    identity = start_session(request, staff)
    log_action(identity=identity, action='register', object_type='staff', object_id=staff.id,
               detail={'role': staff.role, 'ip': request.META.get('REMOTE_ADDR')})
    return Response(format_staff(staff), status=201)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginRateThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    staff = authenticate_staff(vd['email'], vd['password'])
    if staff is None:
        # only the submitted email is recorded
        log_action(identity=None, action='login', object_type='staff',
                   detail={'result': 'fail', 'email': vd['email'], 'ip': request.META.get('REMOTE_ADDR')})
        raise Unauthenticated('Invalid email or password')

    identity = start_session(request, staff)
    log_action(identity=identity, action='login', object_type='staff', object_id=staff.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return Response({'user': format_staff(staff)})


@api_view(['GET'])
@permission_classes([IsStaff])
def me_view(request):
    staff = StaffAccount.objects.filter(pk=request.user.staff_id).first()
    if staff is None:
        return Response(format_identity(request.user))
    return Response(format_staff(staff))


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    end_session(request)
    return Response({'message': 'Logged out'})
