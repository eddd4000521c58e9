"""
Access control for the ward system.

The gate itself is three pure functions over an explicit
:class:`~ward.authentication.SessionIdentity` (or ``None`` when nobody
is logged in).  They raise :class:`~ward.exceptions.Unauthenticated` or
:class:`~ward.exceptions.Forbidden` and have no side effects.  The DRF
permission classes further down are thin adapters so views can declare
their requirements with ``@permission_classes``.
"""
from __future__ import annotations

from typing import Iterable, Optional

from rest_framework.permissions import BasePermission

from .authentication import SessionIdentity
from .exceptions import Forbidden, Unauthenticated
from .models import Role

RESIDENT = Role.RESIDENT.value
SURGEON = Role.SURGEON.value
HEAD_OF_DEPARTMENT = Role.HEAD_OF_DEPARTMENT.value

ROLES = frozenset({RESIDENT, SURGEON, HEAD_OF_DEPARTMENT})
CLINICAL_WRITERS = frozenset({RESIDENT, HEAD_OF_DEPARTMENT})
HEAD_ONLY = frozenset({HEAD_OF_DEPARTMENT})


def require_authenticated(identity: Optional[SessionIdentity]) -> SessionIdentity:
    if identity is None or not isinstance(identity, SessionIdentity):
        raise Unauthenticated('You must log in first')
    return identity


def require_role(identity: Optional[SessionIdentity], allowed_roles: Iterable[str]) -> SessionIdentity:
    identity = require_authenticated(identity)
    if identity.role not in set(allowed_roles):
        raise Forbidden('Your role does not permit this action')
    return identity


def can_modify_resource(identity: Optional[SessionIdentity], resource_author_id: Optional[int]) -> SessionIdentity:
    """Permit the head of department, or the author of the resource."""
    identity = require_authenticated(identity)
    if identity.role == HEAD_OF_DEPARTMENT:
        return identity
    if resource_author_id is None or identity.staff_id != resource_author_id:
        raise Forbidden('You can only modify or delete what you published')
    return identity


class IsStaff(BasePermission):
    """Any logged in staff member."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        require_authenticated(getattr(request, 'user', None))
        return True


class _RolePermission(BasePermission):
    allowed_roles: frozenset = frozenset()

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        require_role(getattr(request, 'user', None), self.allowed_roles)
        return True


class IsResidentOrHead(_RolePermission):
    """Residents and the head of department: clinical write access."""
    allowed_roles = CLINICAL_WRITERS


class IsHeadOfDepartment(_RolePermission):
    """Only the head of department."""
    allowed_roles = HEAD_ONLY
