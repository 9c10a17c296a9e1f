"""
Custom Exceptions for the Portfolio API
=======================================

Every error the API reports to a client is one of these. The exception
handlers in ``portfolio.main`` turn them into the uniform envelope built by
``error_response``:

    {"success": false, "message": ..., "error_code": ..., "timestamp": ..., "details": ...}

Usage:
    from portfolio.core.exceptions import NotFoundError, PermissionDeniedError

    project = await repo.get(project_id)
    if not project:
        raise NotFoundError("Project", project_id)
"""

from datetime import datetime, timezone
from typing import Optional, Any, Dict, List

from sqlalchemy.exc import IntegrityError


class PortfolioError(Exception):
    """Base exception for all Portfolio API errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_SERVER_ERROR",
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(PortfolioError):
    """Input validation failed"""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation error",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        if errors is None and field:
            errors = [{"field": field, "message": message}]
        super().__init__(message, code="VALIDATION_ERROR", details=errors)

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Build from a pydantic (or FastAPI request) validation error"""
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            errors.append({
                "field": ".".join(loc) or None,
                "message": err.get("msg", "Invalid value"),
            })
        return cls("Validation error", errors=errors)


class NoUpdateFieldsError(ValidationError):
    """An update request carried nothing to change"""

    def __init__(self):
        super().__init__("No fields to update")
        self.code = "NO_UPDATE_FIELDS"


class InvalidCredentialsError(PortfolioError):
    """Login with an unknown email or a wrong password"""

    status_code = 400

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class ConflictError(PortfolioError):
    """A unique key (email, slug, skill name, ...) is already taken"""

    status_code = 400

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code=code)


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthTokenMissingError(PortfolioError):
    """No bearer token on a protected route"""

    status_code = 401

    def __init__(self, message: str = "Access token required"):
        super().__init__(message, code="AUTH_TOKEN_MISSING")


class AuthUserNotFoundError(PortfolioError):
    """Token is well formed but its user no longer exists"""

    status_code = 401

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="AUTH_USER_NOT_FOUND")


class AuthTokenInvalidError(PortfolioError):
    """Bad signature, malformed token or wrong token type"""

    status_code = 403

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, code="AUTH_TOKEN_INVALID")


class AuthTokenExpiredError(AuthTokenInvalidError):
    """JWT token has expired"""

    def __init__(self):
        super().__init__("Token has expired")
        self.code = "AUTH_TOKEN_EXPIRED"


class PermissionDeniedError(PortfolioError):
    """Authenticated, but not allowed to perform this action"""

    status_code = 403

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, code="INSUFFICIENT_PERMISSIONS")


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(PortfolioError):
    """Resource lookup failed"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None, code: Optional[str] = None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            code=code or f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
        )


# ============================================
# Server Errors (500-type)
# ============================================

class InternalError(PortfolioError):
    """Unclassified store or runtime failure; the cause is logged, never returned"""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_SERVER_ERROR")


# ============================================
# Store constraint mapping
# ============================================

UNIQUE_MARKERS = ("unique", "duplicate key")
FOREIGN_KEY_MARKERS = ("foreign key", "violates foreign key")


def map_integrity_error(
    exc: IntegrityError,
    conflict_message: str = "Resource already exists",
    conflict_code: str = "CONFLICT",
    missing_resource: str = "Referenced resource",
) -> PortfolioError:
    """Translate a constraint violation into Conflict, NotFound or InternalError"""
    text = str(getattr(exc, "orig", exc)).lower()
    if any(marker in text for marker in UNIQUE_MARKERS):
        return ConflictError(conflict_message, code=conflict_code)
    if any(marker in text for marker in FOREIGN_KEY_MARKERS):
        return NotFoundError(missing_resource)
    return InternalError()


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: PortfolioError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    body: Dict[str, Any] = {
        "success": False,
        "message": error.message,
        "error_code": error.code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if error.details:
        body["details"] = error.details
    return body
