from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from portfolio.core.database import get_db
from portfolio.core.exceptions import AuthTokenMissingError, AuthUserNotFoundError, PermissionDeniedError
from portfolio.core.logging_config import logger, set_user_id
from portfolio.core.security import decode_access_token
from portfolio.models.user import User
from portfolio.modules.auth.permissions import Actor

# auto_error=False so a missing header becomes AUTH_TOKEN_MISSING (401) instead of FastAPI's 403
security = HTTPBearer(auto_error=False)


async def authenticate_token(token: Optional[str], db: AsyncSession) -> Actor:
    """
    Verify a bearer token and re-read its user.

    Raises:
        AuthTokenMissingError: no token was presented
        AuthTokenInvalidError / AuthTokenExpiredError: signature, format or expiry failure
        AuthUserNotFoundError: the token is valid but the user was deleted
    """
    if not token:
        raise AuthTokenMissingError()

    payload = decode_access_token(token)
    user_id = payload["sub"]

    # Claims in the token are not trusted on their own: role changes and
    # deletions take effect on the next request
    result = await db.execute(
        select(User).where(User.user_id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        logger.log_auth_event(event="token", success=False, reason="user no longer exists", account_id=user_id)
        raise AuthUserNotFoundError()

    return Actor.from_user(user)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Actor:
    """Get current authenticated actor"""
    token = credentials.credentials if credentials else None
    actor = await authenticate_token(token, db)

    set_user_id(actor.id)
    request.state.user_id = actor.id
    return actor


async def require_admin(
    current_user: Actor = Depends(get_current_user)
) -> Actor:
    """Get current admin user"""
    if not current_user.is_admin:
        raise PermissionDeniedError("Insufficient permissions")
    return current_user
