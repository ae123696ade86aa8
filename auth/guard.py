# backend/auth/guard.py
"""Authorization decisions for track operations.

``authorize`` is a pure function: it looks only at the session, the
action and the owner id of the target record. Callers must confirm the
record exists before asking about update/delete, so a missing track is
reported as 404 rather than as a permission problem.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from auth.session_store import Session
from errors import ForbiddenError, UnauthorizedError

UNAUTHORIZED = "unauthorized"
FORBIDDEN = "forbidden"


class Action(str, Enum):
    READ_PUBLIC = "read-public"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None


ALLOW = Decision(True)


def same_account(user_id: Any, owner_id: Any) -> bool:
    """Compare account ids by value, whatever their stored type."""
    if user_id is None or owner_id is None:
        return False
    return str(user_id) == str(owner_id)


def authorize(session: Optional[Session], action: Action, resource_owner_id: Any = None) -> Decision:
    if action == Action.READ_PUBLIC:
        return ALLOW
    if session is None or not session.user_id:
        return Decision(False, UNAUTHORIZED)
    if action == Action.CREATE:
        return ALLOW
    if session.is_admin or same_account(session.user_id, resource_owner_id):
        return ALLOW
    return Decision(False, FORBIDDEN)


def enforce(decision: Decision) -> None:
    """Raise the matching client error for a denied decision."""
    if decision.allowed:
        return
    if decision.reason == UNAUTHORIZED:
        raise UnauthorizedError()
    raise ForbiddenError()
