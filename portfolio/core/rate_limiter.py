"""
Rate Limiting for the Portfolio API
===================================
Per-route limits with slowapi. Storage is in-process by default; point
RATE_LIMIT_STORAGE_URI at a shared backend when running several workers.

Limited endpoints:
- /auth/login: 5 req/min (brute force protection)
- /auth/register: 3 req/min
- /contact (POST): 5 req/min (public form)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from portfolio.core.config import settings
from portfolio.core.exceptions import PortfolioError, error_response
from portfolio.core.logging_config import logger


LOGIN_LIMIT = "5/minute"
REGISTER_LIMIT = "3/minute"
CONTACT_LIMIT = "5/minute"


def get_user_identifier(request: Request) -> str:
    """
    Rate limit key: authenticated user id when known, else client IP.
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Render RateLimitExceeded in the standard error envelope"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )
    error = PortfolioError(
        "Too many requests. Please slow down.",
        code="RATE_LIMIT_EXCEEDED",
        status_code=429,
    )
    return JSONResponse(
        status_code=429,
        content=error_response(error),
        headers={"Retry-After": "60"},
    )
