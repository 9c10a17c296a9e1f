"""
Unit Tests for bearer token verification against the credential store
"""
from datetime import timedelta

import pytest

from portfolio.core.exceptions import (
    AuthTokenExpiredError,
    AuthTokenInvalidError,
    AuthTokenMissingError,
    AuthUserNotFoundError,
)
from portfolio.core.security import create_access_token
from portfolio.models.user import UserRole
from portfolio.modules.auth.dependencies import authenticate_token


@pytest.mark.asyncio
async def test_valid_token_returns_actor(db_session, test_user):
    token = create_access_token(test_user.user_id, test_user.email, "user")

    actor = await authenticate_token(token, db_session)

    assert actor.id == test_user.user_id
    assert actor.email == test_user.email
    assert actor.role == UserRole.USER


@pytest.mark.asyncio
async def test_missing_token(db_session):
    with pytest.raises(AuthTokenMissingError):
        await authenticate_token(None, db_session)


@pytest.mark.asyncio
async def test_foreign_secret(db_session, test_user):
    token = create_access_token(test_user.user_id, test_user.email, "user", secret_key="not-our-secret")

    with pytest.raises(AuthTokenInvalidError):
        await authenticate_token(token, db_session)


@pytest.mark.asyncio
async def test_expired_token(db_session, test_user):
    token = create_access_token(test_user.user_id, test_user.email, "user", expires_delta=timedelta(seconds=-1))

    with pytest.raises(AuthTokenExpiredError):
        await authenticate_token(token, db_session)


@pytest.mark.asyncio
async def test_deleted_user(db_session, test_user):
    token = create_access_token(test_user.user_id, test_user.email, "user")
    await db_session.delete(test_user)
    await db_session.commit()

    with pytest.raises(AuthUserNotFoundError):
        await authenticate_token(token, db_session)


@pytest.mark.asyncio
async def test_role_comes_from_store_not_token(db_session, test_user):
    """A token claiming admin does not make a plain user an admin"""
    token = create_access_token(test_user.user_id, test_user.email, "admin")

    actor = await authenticate_token(token, db_session)

    assert actor.is_admin is False


@pytest.mark.asyncio
async def test_promotion_takes_effect_immediately(db_session, test_user):
    token = create_access_token(test_user.user_id, test_user.email, "user")
    test_user.role = UserRole.ADMIN
    await db_session.commit()

    actor = await authenticate_token(token, db_session)

    assert actor.is_admin is True
