"""
Authorization guard for mutating operations.

Callers load the target first (404 when it does not exist) and only then ask
the guard, so an invalid id never reveals whether someone else owns it.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
import enum

from portfolio.core.exceptions import PermissionDeniedError
from portfolio.core.logging_config import logger
from portfolio.models.user import User, UserRole


class Operation(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Actor:
    """Identity making the request, rebuilt from a verified token and a fresh user row"""
    id: str
    email: str
    role: UserRole
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(
            id=str(user.user_id),
            email=user.email,
            role=UserRole(user.role),
            full_name=user.full_name,
            created_at=user.created_at,
        )


def can_mutate(actor: Actor, owner_id: Optional[str]) -> bool:
    """Admins may change anything; everyone else only what they own"""
    if actor.is_admin:
        return True
    return owner_id is not None and str(owner_id) == actor.id


def ensure_can_mutate(actor: Actor, resource: Any, operation: Operation = Operation.UPDATE) -> None:
    """
    Raise PermissionDeniedError unless ``actor`` may apply ``operation`` to ``resource``.

    ``resource`` must already be loaded; its ``owner_id`` is None for shared
    catalog entries, which only admins may touch.
    """
    owner_id = getattr(resource, "owner_id", None)
    if not can_mutate(actor, owner_id):
        logger.log_access_denied(actor.id, type(resource).__name__, operation.value, owner_id)
        raise PermissionDeniedError(f"You can only {operation.value} your own resources")
