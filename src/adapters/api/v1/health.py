"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from src.infrastructure.dependency_injection.auth_dependencies import AppDatabase

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    database: str
    timestamp: datetime


@router.get("", response_model=HealthResponse)
async def health_check(database: AppDatabase):
    """Report ``ok`` when the database answers, ``degraded`` otherwise."""
    db_healthy = await database.check_health()
    return HealthResponse(
        status="ok" if db_healthy else "degraded",
        database="healthy" if db_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
