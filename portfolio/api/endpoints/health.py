"""
Health check endpoints.

``GET /health`` only says the process is up; ``GET {API_PREFIX}/health`` also
round-trips to the database.
"""
from datetime import datetime, timezone
import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.core.config import settings
from portfolio.core.database import get_db
from portfolio.core.logging_config import logger

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
        database = "connected"
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        database = "unreachable"

    body = {
        "status": "healthy" if database == "connected" else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
        "latency_ms": round((time.time() - start) * 1000, 2),
        "environment": settings.ENVIRONMENT,
    }
    if database != "connected":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
