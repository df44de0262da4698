"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 when the manager is not initialized yet
      or the database is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from skillbridge.infrastructure.database import (
    DatabaseSessionManager, find_db_manager,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "skillbridge-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    manager: DatabaseSessionManager | None = Depends(find_db_manager),
):
    """Readiness probe — database manager initialized and reachable."""
    if manager is None:
        return _not_ready("database_not_initialized")
    if not await manager.health_check():
        return _not_ready("database_unavailable")
    return {"status": "ready", "checks": {"database": "healthy"}}


def _not_ready(reason: str) -> JSONResponse:
    logger.warning(f"Readiness check failed: {reason}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
