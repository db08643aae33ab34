"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from clinic_desk.config import settings
from clinic_desk.core.exceptions import InvalidTimeZoneException
from clinic_desk.core.timezones import resolve_zone
from clinic_desk.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Detailed health check response model."""

    database: str
    time_zone_data: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
)
async def detailed_health_check() -> DetailedHealthResponse:
    """Health check including database reachability and IANA zone data."""
    db_healthy = await check_database_connection()

    try:
        resolve_zone(settings.default_time_zone)
        zones_healthy = True
    except InvalidTimeZoneException:
        zones_healthy = False

    return DetailedHealthResponse(
        status="healthy" if db_healthy and zones_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
        time_zone_data="healthy" if zones_healthy else "unhealthy",
    )


@router.get("/ping", status_code=status.HTTP_200_OK, summary="Simple ping")
async def ping() -> dict[str, str]:
    """Simple ping endpoint."""
    return {"message": "pong"}
