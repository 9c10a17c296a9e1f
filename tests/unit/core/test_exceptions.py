"""
Unit Tests for the error taxonomy and envelope
"""
from datetime import datetime

import pytest
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from portfolio.core.exceptions import (
    AuthTokenExpiredError,
    AuthTokenInvalidError,
    AuthTokenMissingError,
    AuthUserNotFoundError,
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    NoUpdateFieldsError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    error_response,
    map_integrity_error,
)


@pytest.mark.parametrize("error, status_code, code", [
    (ValidationError("bad"), 400, "VALIDATION_ERROR"),
    (NoUpdateFieldsError(), 400, "NO_UPDATE_FIELDS"),
    (InvalidCredentialsError(), 400, "INVALID_CREDENTIALS"),
    (ConflictError("taken", code="SLUG_EXISTS"), 400, "SLUG_EXISTS"),
    (AuthTokenMissingError(), 401, "AUTH_TOKEN_MISSING"),
    (AuthUserNotFoundError(), 401, "AUTH_USER_NOT_FOUND"),
    (AuthTokenInvalidError(), 403, "AUTH_TOKEN_INVALID"),
    (AuthTokenExpiredError(), 403, "AUTH_TOKEN_EXPIRED"),
    (PermissionDeniedError(), 403, "INSUFFICIENT_PERMISSIONS"),
    (NotFoundError("Project", "p1"), 404, "PROJECT_NOT_FOUND"),
    (InternalError(), 500, "INTERNAL_SERVER_ERROR"),
])
def test_status_and_code(error, status_code, code):
    assert error.status_code == status_code
    assert error.code == code


def test_not_found_multiword_resource_code():
    error = NotFoundError("Gallery image")

    assert error.code == "GALLERY_IMAGE_NOT_FOUND"
    assert error.message == "Gallery image not found"


def test_envelope_shape():
    body = error_response(NotFoundError("Project", "p1"))

    assert body["success"] is False
    assert body["message"] == "Project not found"
    assert body["error_code"] == "PROJECT_NOT_FOUND"
    datetime.fromisoformat(body["timestamp"])
    assert "details" not in body


def test_envelope_includes_field_details():
    body = error_response(ValidationError("limit must be between 1 and 100", field="limit"))

    assert body["details"] == [{"field": "limit", "message": "limit must be between 1 and 100"}]


def test_from_pydantic_strips_location_prefix():
    class Payload(BaseModel):
        name: str = Field(..., min_length=1)

    with pytest.raises(PydanticValidationError) as exc_info:
        Payload(name="")

    error = ValidationError.from_pydantic(exc_info.value)

    assert error.code == "VALIDATION_ERROR"
    assert error.details[0]["field"] == "name"


class _FakeDriverError(Exception):
    pass


def _integrity(text: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, _FakeDriverError(text))


def test_unique_violation_maps_to_conflict():
    error = map_integrity_error(
        _integrity("UNIQUE constraint failed: projects.slug"),
        conflict_message="Project with this slug already exists",
        conflict_code="SLUG_EXISTS",
    )

    assert isinstance(error, ConflictError)
    assert error.code == "SLUG_EXISTS"


def test_postgres_duplicate_key_maps_to_conflict():
    error = map_integrity_error(_integrity('duplicate key value violates unique constraint "users_email_key"'))

    assert isinstance(error, ConflictError)


def test_foreign_key_violation_maps_to_not_found():
    error = map_integrity_error(_integrity("FOREIGN KEY constraint failed"))

    assert isinstance(error, NotFoundError)
    assert error.status_code == 404


def test_other_integrity_error_maps_to_internal_without_driver_text():
    error = map_integrity_error(_integrity("NOT NULL constraint failed: projects.title"))

    assert isinstance(error, InternalError)
    assert "projects.title" not in error.message
