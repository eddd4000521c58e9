from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from ward.exceptions import Conflict, NotFound, ValidationFailed
from ward.models import Role, StaffAccount
from ward.permissions import HEAD_ONLY, require_role

logger = logging.getLogger(__name__)


def register_staff(*, email: str, password: str, name: str, role: Optional[str] = None) -> StaffAccount:
    email = email.strip().lower()
    role = role or Role.SURGEON
    if StaffAccount.objects.filter(email__iexact=email).exists():
        raise Conflict('Email is already registered', field='email')
    try:
        validate_password(password)
    except ValidationError as e:
        raise ValidationFailed(f"password: {' '.join(e.messages)}", field='password')

    staff = StaffAccount(email=email, name=name, role=role)
    staff.set_password(password)
    try:
        with transaction.atomic():
            staff.save()
    except IntegrityError:
        # concurrent registration with the same address
        raise Conflict('Email is already registered', field='email')
    logger.info('staff %s registered as %s', staff.pk, staff.role)
    return staff


def authenticate_staff(email: str, password: str) -> Optional[StaffAccount]:
    """Return the account for valid credentials, else ``None``.

    Unknown emails still run the hasher once so both failures cost the same.
    """
    staff = StaffAccount.objects.filter(email__iexact=(email or '').strip()).first()
    if staff is None:
        StaffAccount().set_password(password)
        return None
    if not staff.check_password(password):
        return None
    return staff


def change_role(identity, staff_id: int, role: str) -> StaffAccount:
    identity = require_role(identity, HEAD_ONLY)
    if role not in Role.values:
        raise ValidationFailed(f"role: must be one of {', '.join(Role.values)}", field='role')
    staff = StaffAccount.objects.filter(pk=staff_id).first()
    if staff is None:
        raise NotFound('Staff member not found')
    staff.role = role
    staff.save(update_fields=['role'])
    logger.info('staff %s role changed to %s by staff %s', staff.pk, role, identity.staff_id)
    return staff
