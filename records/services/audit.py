"""Append-only audit trail for logins and record changes."""
from __future__ import annotations

from typing import Optional

from records.models import AuditEvent, User


def log_action(*, user: Optional[User], action: str, object_type: Optional[str] = None,
               object_id: Optional[int] = None, detail: Optional[dict] = None) -> AuditEvent:
    """Write one AuditEvent row.

    ``user`` is ``None`` for anonymous events such as a failed login; an
    unsaved user is recorded the same way.
    """
    actor = user if user is not None and user.pk else None
    return AuditEvent.objects.create(
        user=actor,
        action=action,
        object_type=object_type,
        object_id=object_id,
        detail=detail or {},
    )
