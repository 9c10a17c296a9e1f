from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.core.config import settings
from portfolio.core.database import close_db, init_db
from portfolio.core.exceptions import (
    InternalError,
    PortfolioError,
    ValidationError,
    error_response,
    map_integrity_error,
)
from portfolio.core.logging_config import logger
from portfolio.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from portfolio.core.rate_limiter import limiter, rate_limit_exceeded_handler
from portfolio.api.router import api_router
from portfolio.api.endpoints.resumes import storage_router

APP_VERSION = "1.0.0"

PLACEHOLDER_SECRETS = {"", "CHANGE_ME", "changeme", "secret", "your-secret-key"}

HTTP_ERROR_CODES = {
    401: "AUTH_TOKEN_MISSING",
    403: "INSUFFICIENT_PERMISSIONS",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    413: "PAYLOAD_TOO_LARGE",
}


def validate_critical_config():
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []
    warnings = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if settings.JWT_SECRET_KEY in PLACEHOLDER_SECRETS:
        if settings.is_production:
            errors.append("JWT_SECRET_KEY is not set or using a placeholder value")
        else:
            warnings.append("JWT_SECRET_KEY is a placeholder - do not use this outside development")
    elif len(settings.JWT_SECRET_KEY) < 32:
        warnings.append("JWT_SECRET_KEY is shorter than 32 characters")

    if settings.is_production and settings.DEBUG:
        warnings.append("DEBUG is enabled in production - error messages will leak details")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    logger.info("[Startup] Critical configuration validated")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")

    validate_critical_config()
    await init_db()
    settings.RESUMES_DIR.mkdir(parents=True, exist_ok=True)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Portfolio backend: projects, skills, experience, education, resumes and contact messages",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE_BYTES)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.code} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError.from_pydantic(exc)
    return JSONResponse(status_code=error.status_code, content=error_response(error))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error = PortfolioError(
        str(exc.detail),
        code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        status_code=exc.status_code,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(error),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Unhandled integrity error on {request.url.path}: {exc.orig}")
    error = map_integrity_error(exc)
    return JSONResponse(status_code=error.status_code, content=error_response(error))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.log_unhandled(exc, request.method, request.url.path)
    error = InternalError(str(exc) if settings.DEBUG else "Internal server error")
    return JSONResponse(status_code=500, content=error_response(error))


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness only; {API_PREFIX}/health also checks the database"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(storage_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "portfolio.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )
