# Authentication and authorization

from portfolio.modules.auth.dependencies import (
    authenticate_token,
    get_current_user,
    require_admin,
)

from portfolio.modules.auth.permissions import (
    Actor,
    Operation,
    can_mutate,
    ensure_can_mutate,
)

__all__ = [
    # Token verification
    "authenticate_token",
    "get_current_user",
    "require_admin",
    # Guard
    "Actor",
    "Operation",
    "can_mutate",
    "ensure_can_mutate",
]
