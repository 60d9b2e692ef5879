"""
Health Check Endpoints

Provides health and readiness checks for orchestration systems.
"""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from bi_dashboard.config import get_settings
from bi_dashboard.database.connection import check_database_health

router = APIRouter()


async def database_health() -> Dict[str, Any]:
    """Store connectivity as a dependency, so apps with their own sessions can swap it."""
    return await check_database_health()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db_health: Dict[str, Any] = Depends(database_health),
) -> HealthResponse:
    """
    Health check endpoint.

    Reports the application version and database connectivity.
    """
    settings = get_settings()
    overall_status = "healthy" if db_health.get("status") == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        checks={"database": db_health},
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """
    Liveness probe endpoint.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(
    response: Response,
    db_health: Dict[str, Any] = Depends(database_health),
) -> Dict[str, str]:
    """
    Readiness probe endpoint.

    Returns 503 until the database answers.
    """
    if db_health.get("status") != "healthy":
        response.status_code = 503
        return {"status": "not_ready", "reason": "database_unavailable"}

    return {"status": "ready"}
