"""
Portfolio API - HTTP Middleware
Request logging, security headers and body size limits
"""

import time
from typing import Callable, FrozenSet
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from portfolio.core.exceptions import PortfolioError, error_response
from portfolio.core.logging_config import (
    logger,
    clear_context,
    generate_request_id,
    set_request_id,
)


# Probes and docs are not worth a log line each
QUIET_PATHS: FrozenSet[str] = frozenset({
    "/",
    "/health",
    "/api/health",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
})

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id (the caller's X-Request-ID when present),
    echoes it with the elapsed time on the response and logs the outcome.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
            if request.url.path not in QUIET_PATHS:
                logger.log_request(
                    request.method,
                    request.url.path,
                    response.status_code,
                    elapsed_ms,
                    client_ip=request.client.host if request.client else None,
                )
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Answers 413 before reading a body whose declared Content-Length exceeds max_size"""

    def __init__(self, app: ASGIApp, max_size: int):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_size:
            logger.warning(
                f"Rejected {declared} byte body on {request.url.path} (limit {self.max_size})",
                extra={"event_type": "request_too_large", "http_path": request.url.path},
            )
            error = PortfolioError(
                f"Request body too large. Maximum size is {self.max_size // (1024 * 1024)}MB",
                code="PAYLOAD_TOO_LARGE",
                status_code=413,
            )
            return JSONResponse(status_code=error.status_code, content=error_response(error))
        return await call_next(request)


__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "RequestSizeLimitMiddleware",
    "QUIET_PATHS",
]
