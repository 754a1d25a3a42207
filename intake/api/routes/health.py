"""Health & Readiness Probes — liveness and readiness endpoints for orchestration.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database or the cache is unreachable
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from intake.infrastructure import cache as cache_module
from intake.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "intake-api"
SERVICE_VERSION = "1.0.0"


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: database and cache connectivity."""
    db_ok = (
        await database.db_manager.health_check()
        if database.db_manager else False
    )
    cache_ok = (
        await cache_module.cache.ping() if cache_module.cache else False
    )
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "cache": "healthy" if cache_ok else "unavailable",
    }
    if not (db_ok and cache_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
