"""Front desk dashboard endpoints."""

from datetime import date

from fastapi import APIRouter, Query

from clinic_desk.config import settings
from clinic_desk.dependencies import CurrentUser, DashboardServiceDep
from clinic_desk.schemas.dashboard import DailyDashboardResponse

router = APIRouter()


@router.get(
    "/daily",
    response_model=DailyDashboardResponse,
    summary="Daily appointment counts and revenue",
)
async def daily_dashboard(
    current_user: CurrentUser,
    service: DashboardServiceDep,
    day: date = Query(..., alias="date"),
    time_zone: str | None = Query(None),
    clinic_location_id: int | None = Query(None, ge=1),
) -> DailyDashboardResponse:
    """
    Summarise one local calendar day.

    Returns:
        Totals for scheduled, completed and cancelled appointments plus the
        revenue from completed ones
    """
    zone = time_zone or settings.default_time_zone
    summary = await service.daily_summary(day, zone, clinic_location_id)
    return DailyDashboardResponse(
        **summary.model_dump(),
        day=day,
        time_zone=zone,
        clinic_location_id=clinic_location_id,
    )
