"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET / and GET /health always return 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - GET / keeps the static message existing uptime checks expect
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from account_store.api.dependencies import get_db_manager
from account_store.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def root():
    return {"message": "Backend is working"}


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "account-store",
        "version": "1.0.0",
    }


@router.get("/health/ready")
async def readiness_check(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Readiness probe, including database connectivity."""
    if not await db_manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
