"""
Session based authentication for the ward API.

The browser only holds Django's opaque session cookie.  On login the
server stores a :class:`SessionIdentity` projection of the staff account
(no password) in the session; every request then gets that identity as
``request.user``.  Services receive the identity explicitly and never
read the session themselves.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.middleware.csrf import rotate_token
from rest_framework import authentication

SESSION_KEY = '_ward_identity'


@dataclass(frozen=True)
class SessionIdentity:
    """Who is acting: the part of a staff account held in the session."""
    staff_id: int
    display_name: str
    role: str

    # DRF (throttles, permission helpers) treats request.user like a Django user.
    is_authenticated = True
    is_anonymous = False

    @property
    def pk(self) -> int:
        return self.staff_id

    @classmethod
    def for_staff(cls, staff) -> 'SessionIdentity':
        return cls(staff_id=staff.id, display_name=staff.name, role=staff.role)

    def to_session(self) -> dict:
        return {'staffId': self.staff_id, 'displayName': self.display_name, 'role': self.role}

    @classmethod
    def from_session(cls, data) -> Optional['SessionIdentity']:
        if not isinstance(data, dict):
            return None
        try:
            return cls(staff_id=int(data['staffId']), display_name=str(data['displayName']), role=str(data['role']))
        except (KeyError, TypeError, ValueError):
            return None


def start_session(request, staff) -> SessionIdentity:
    """Attach ``staff`` to the request's session under a fresh session key."""
    identity = SessionIdentity.for_staff(staff)
    session = request.session
    session.cycle_key()
    session[SESSION_KEY] = identity.to_session()
    rotate_token(getattr(request, '_request', request))
    return identity


def refresh_session(request, staff) -> None:
    """Rewrite the stored identity if ``staff`` is the one logged in on ``request``."""
    current = SessionIdentity.from_session(request.session.get(SESSION_KEY))
    if current and current.staff_id == staff.id:
        request.session[SESSION_KEY] = SessionIdentity.for_staff(staff).to_session()


def end_session(request) -> None:
    request.session.flush()


class SessionIdentityAuthentication(authentication.SessionAuthentication):
    """Resolve ``request.user`` from the server-side session.

    Returns ``None`` when there is no identity so that the request is
    anonymous; permission checks then answer 401.  Unsafe methods of a
    logged in session must carry the CSRF token, as with DRF's own
    session authentication.
    """

    def authenticate(self, request):
        session = getattr(request._request, 'session', None)
        if session is None:
            return None
        identity = SessionIdentity.from_session(session.get(SESSION_KEY))
        if identity is None:
            return None
        self.enforce_csrf(request)
        return (identity, None)

    def authenticate_header(self, request):
        return 'Session'
