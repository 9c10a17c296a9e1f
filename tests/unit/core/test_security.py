"""
Unit Tests for Security Module
Tests for: password hashing, access token issue/verify
"""
import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from portfolio.core.config import settings
from portfolio.core.exceptions import AuthTokenExpiredError, AuthTokenInvalidError
from portfolio.core.security import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("testpassword123")

        assert hashed != "testpassword123"
        assert hashed.startswith("$2")

    def test_hash_different_each_time(self):
        # Bcrypt generates different salts
        assert get_password_hash("testpassword123") != get_password_hash("testpassword123")

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_against_plaintext_storage_fails(self):
        """A stored value that is not a bcrypt hash never verifies"""
        assert verify_password("admin123", "admin123") is False

    def test_verify_empty_hash(self):
        assert verify_password("anything", "") is False

    def test_long_password_truncated_consistently(self):
        password = "x" * 100
        hashed = get_password_hash(password)

        assert verify_password(password, hashed) is True


class TestAccessToken:
    """Test JWT access tokens"""

    def test_round_trip_claims(self):
        token = create_access_token("user-1", "a@example.com", "admin")
        payload = decode_access_token(token)

        assert payload["sub"] == "user-1"
        assert payload["email"] == "a@example.com"
        assert payload["role"] == "admin"
        assert payload["type"] == ACCESS_TOKEN_TYPE

    def test_default_lifetime_is_seven_days(self):
        token = create_access_token("user-1", "a@example.com", "user")
        payload = jwt.get_unverified_claims(token)

        expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        remaining = expires - datetime.now(timezone.utc)
        assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)

    def test_expired_token(self):
        token = create_access_token("user-1", "a@example.com", "user", expires_delta=timedelta(seconds=-10))

        with pytest.raises(AuthTokenExpiredError) as exc_info:
            decode_access_token(token)

        assert exc_info.value.code == "AUTH_TOKEN_EXPIRED"

    def test_expired_is_a_kind_of_invalid(self):
        token = create_access_token("user-1", "a@example.com", "user", expires_delta=timedelta(seconds=-10))

        with pytest.raises(AuthTokenInvalidError):
            decode_access_token(token)

    def test_foreign_secret_rejected(self):
        token = create_access_token("user-1", "a@example.com", "user", secret_key="some-other-secret")

        with pytest.raises(AuthTokenInvalidError) as exc_info:
            decode_access_token(token)

        assert exc_info.value.code == "AUTH_TOKEN_INVALID"
        assert exc_info.value.status_code == 403

    def test_garbage_token_rejected(self):
        with pytest.raises(AuthTokenInvalidError):
            decode_access_token("not.a.jwt")

    def test_wrong_token_type_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "type": "refresh", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(AuthTokenInvalidError):
            decode_access_token(token)

    def test_missing_subject_rejected(self):
        token = jwt.encode(
            {"type": ACCESS_TOKEN_TYPE, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(AuthTokenInvalidError):
            decode_access_token(token)
