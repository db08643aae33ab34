"""Dashboard schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    """Counts and revenue over a set of appointments."""

    total: int = 0
    completed_count: int = 0
    upcoming_count: int = 0
    cancelled_count: int = 0
    total_revenue: Decimal = Decimal("0")
    completion_rate: int = 0


class DailyDashboardResponse(DashboardSummary):
    """Summary for one local calendar day."""

    day: date
    time_zone: str
    clinic_location_id: int | None = None
