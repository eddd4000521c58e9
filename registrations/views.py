"""
Evacuation registration endpoints.

Submitting is public and rate limited per client address.  Reading the
submissions back requires a staff session.
"""
from __future__ import annotations

import logging

from django.db.models import Count
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import BasePermission
from rest_framework.response import Response

from ward.permissions import IsStaff, require_authenticated
from ward.throttling import RegistrationRateThrottle

from .models import Registration
from .serializers import RegistrationSerializer, format_registration

logger = logging.getLogger(__name__)


class SubmitOrStaff(BasePermission):
    """Anyone may submit; listing needs a staff session."""

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method != 'POST':
            require_authenticated(getattr(request, 'user', None))
        return True


class SubmissionRateThrottle(RegistrationRateThrottle):

    def allow_request(self, request, view):
        if request.method != 'POST':
            return True
        return super().allow_request(request, view)


@api_view(['GET', 'POST'])
@permission_classes([SubmitOrStaff])
@throttle_classes([SubmissionRateThrottle])
def registrations(request):
    if request.method == 'GET':
        return Response([format_registration(r) for r in Registration.objects.all()])

    s = RegistrationSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    registration = s.save()
    logger.info('evacuation registration %s received (passport: %s)', registration.pk, registration.passport_status)
    return Response(format_registration(registration), status=201)


@api_view(['GET'])
@permission_classes([IsStaff])
def registration_stats(request):
    by_passport = {value: 0 for value, _ in Registration.PASSPORT_CHOICES}
    for row in Registration.objects.values('passport_status').annotate(n=Count('id')):
        by_passport[row['passport_status']] = row['n']
    return Response({'total': sum(by_passport.values()), 'byPassportStatus': by_passport})
