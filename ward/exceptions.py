"""
Error taxonomy of the ward system and the unified API exception handler.

Services raise the domain exceptions below; the DRF exception handler turns
them (and DRF's own exceptions) into JSON bodies that always carry a
``message`` field.  Persistence failures are logged with their detail and
returned as an opaque 500.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import DatabaseError
from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class WardError(Exception):
    status_code = 400
    code = 'error'
    default_message = 'Request failed'

    def __init__(self, message: Optional[str] = None, *, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class Unauthenticated(WardError):
    status_code = 401
    code = 'unauthenticated'
    default_message = 'Authentication required'


class Forbidden(WardError):
    status_code = 403
    code = 'forbidden'
    default_message = 'You do not have permission to perform this action'


class NotFound(WardError):
    status_code = 404
    code = 'not_found'
    default_message = 'Resource not found'


class ValidationFailed(WardError):
    status_code = 400
    code = 'validation_failed'
    default_message = 'Invalid input'


class Conflict(WardError):
    status_code = 400
    code = 'conflict'
    default_message = 'Request conflicts with the current state'


class StoreUnavailable(WardError):
    status_code = 500
    code = 'store_unavailable'
    default_message = 'Internal server error, please retry later'


def first_error(detail: Any, path: str = '') -> tuple[str, str]:
    """Return ``(field_path, message)`` of the first error in a DRF detail.

    Nested serializer errors produce dotted paths such as ``items.0.name``.
    """
    if isinstance(detail, dict):
        for key, value in detail.items():
            if key in ('non_field_errors', 'detail'):
                sub = path
            else:
                sub = f'{path}.{key}' if path else str(key)
            return first_error(value, sub)
        return path, ''
    if isinstance(detail, list):
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                return first_error(value, f'{path}.{index}' if path else str(index))
            return first_error(value, path)
        return path, ''
    return path, str(detail)


def _body(code: str, message: str, field: Optional[str] = None, **extra) -> dict:
    body: dict[str, Any] = {'ok': False, 'code': code, 'message': message}
    if field:
        body['field'] = field
    body.update(extra)
    return body


def api_exception_handler(exc, context):
    # rest_framework.views loads DEFAULT_PERMISSION_CLASSES, which import this module
    from rest_framework.views import exception_handler as drf_exception_handler, set_rollback

    if isinstance(exc, WardError):
        set_rollback()
        if isinstance(exc, StoreUnavailable):
            logger.error('store unavailable: %s', exc.message)
            return Response(_body(exc.code, StoreUnavailable.default_message), status=exc.status_code)
        return Response(_body(exc.code, exc.message, exc.field), status=exc.status_code)

    if isinstance(exc, DatabaseError):
        set_rollback()
        view = context.get('view')
        logger.exception('database failure in %s', getattr(view, '__name__', None) or type(view).__name__)
        return Response(_body(StoreUnavailable.code, StoreUnavailable.default_message), status=500)

    if isinstance(exc, drf_exceptions.ValidationError):
        set_rollback()
        field, message = first_error(exc.detail)
        text = f'{field}: {message}' if field else message
        return Response(_body(ValidationFailed.code, text, field, errors=exc.detail), status=400)

    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        set_rollback()
        return Response(_body(Unauthenticated.code, str(exc.detail)), status=401)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error')
        return Response(_body('server_error', 'Internal server error'), status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(getattr(exc, 'detail', None), 'code', None) or 'api_error'
    return Response(_body(code, str(detail)), status=resp.status_code, headers=_retry_headers(resp))


def _retry_headers(resp) -> dict:
    retry = resp.headers.get('Retry-After')
    return {'Retry-After': retry} if retry else {}
