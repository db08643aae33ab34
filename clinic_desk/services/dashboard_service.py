"""Dashboard counts and revenue for the front desk."""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from clinic_desk.schemas.appointments import AppointmentRecord, AppointmentStatus
from clinic_desk.schemas.dashboard import DashboardSummary
from clinic_desk.services.appointment_service import AppointmentService

AppointmentLike = AppointmentRecord | Mapping[str, Any]


def _field(record: AppointmentLike, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _status(record: AppointmentLike) -> str | None:
    value = _field(record, "status")
    if isinstance(value, AppointmentStatus):
        return value.value
    return value


def _amount(record: AppointmentLike) -> Decimal:
    value = _field(record, "amount")
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    # NaN and infinities count as nothing billed
    return amount if amount.is_finite() else Decimal("0")


def aggregate(records: Iterable[AppointmentLike]) -> DashboardSummary:
    """
    Summarise appointments into status counts and revenue.

    Revenue sums the amount of completed appointments only; missing or
    non-numeric amounts contribute zero. Input order does not matter.

    Args:
        records: Appointment records or raw rows, usually one day's worth

    Returns:
        Totals per status, revenue and completion percentage
    """
    total = completed = upcoming = cancelled = 0
    revenue = Decimal("0")

    for record in records:
        total += 1
        status = _status(record)
        if status == AppointmentStatus.COMPLETED.value:
            completed += 1
            revenue += _amount(record)
        elif status == AppointmentStatus.SCHEDULED.value:
            upcoming += 1
        elif status == AppointmentStatus.CANCELLED.value:
            cancelled += 1

    counted = completed + upcoming + cancelled
    completion_rate = 0
    if counted:
        rate = Decimal(completed * 100) / counted
        completion_rate = int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    return DashboardSummary(
        total=total,
        completed_count=completed,
        upcoming_count=upcoming,
        cancelled_count=cancelled,
        total_revenue=revenue,
        completion_rate=completion_rate,
    )


class DashboardService:
    """Service composing day listings into dashboard figures."""

    def __init__(self, appointment_service: AppointmentService):
        """Initialize service with the appointment scheduler."""
        self.appointments = appointment_service

    async def daily_summary(
        self,
        calendar_date: str | date,
        time_zone: str,
        clinic_location_id: int | None = None,
    ) -> DashboardSummary:
        """Summarise one local calendar day."""
        records = await self.appointments.list_by_day(calendar_date, time_zone, clinic_location_id)
        return aggregate(records)
