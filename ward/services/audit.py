from typing import Optional, Any, Dict

from ward.authentication import SessionIdentity
from ward.models import AuditEvent


def log_action(*, identity: Optional[SessionIdentity], action: str, object_type: Optional[str] = None,
               object_id: Optional[int] = None, detail: Optional[Dict[str, Any]] = None) -> AuditEvent:
    return AuditEvent.objects.create(
        actor_id=identity.staff_id if isinstance(identity, SessionIdentity) else None,
        action=action,
        object_type=object_type, object_id=object_id,
        detail=detail or {},
    )
