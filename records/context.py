"""
Per-request caller identity handed to the service layer.

Views build a :class:`CallerContext` once from the authenticated
request and pass it down explicitly; services never read the request
or other global state to find out who is acting.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import User


@dataclass(frozen=True)
class CallerContext:
    user: User
    ip: Optional[str] = None

    @property
    def user_id(self) -> int:
        return self.user.pk


def context_for(request) -> CallerContext:
    """Return the context for an authenticated DRF request."""
    return CallerContext(user=request.user, ip=request.META.get('REMOTE_ADDR'))
