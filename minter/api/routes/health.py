"""Health & Readiness Probes.

Invariants:
    - GET /api/v1/health/ returns 200 whenever the process is up
    - GET /api/v1/health/ready returns 503 if the snapshot database is unreachable
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import minter.infrastructure.database as database

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": "membership-minter", "version": "0.1.0"}


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
