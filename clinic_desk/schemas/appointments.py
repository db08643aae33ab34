"""Appointment schemas for request/response validation."""

from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppointmentCreate(BaseModel):
    """
    Input for booking an appointment.

    Field rules (name length, phone format) are enforced by the scheduler so
    they surface as domain errors rather than schema errors.
    """

    patient_name: str
    local_datetime: str = Field(..., description="Naive local date-time, e.g. 2024-03-01T10:00")
    time_zone: str = Field(..., description="IANA zone of local_datetime")
    clinic_location_id: int
    actor_name: str
    patient_phone: str | None = None
    notes: str | None = None
    patient_id: int | None = None


class AppointmentUpdate(BaseModel):
    """Full replacement of an appointment's mutable fields."""

    patient_name: str
    clinic_location_id: int
    actor_name: str
    patient_phone: str | None = None
    status: str | None = None
    diagnosis: str | None = None
    notes: str | None = None
    amount: Decimal | None = None


class AppointmentCreateRequest(BaseModel):
    """Booking request body; zone and clinic fall back to configured defaults."""

    patient_name: str
    local_datetime: str
    time_zone: str | None = None
    clinic_location_id: int | None = None
    patient_phone: str | None = None
    notes: str | None = Field(None, max_length=2000)
    patient_id: int | None = None


class AppointmentUpdateRequest(BaseModel):
    """Update request body; the actor is taken from the signed-in user."""

    patient_name: str
    clinic_location_id: int | None = None
    patient_phone: str | None = None
    status: str | None = None
    diagnosis: str | None = Field(None, max_length=2000)
    notes: str | None = Field(None, max_length=2000)
    amount: Decimal | None = None


class AppointmentRecord(BaseModel):
    """A stored appointment."""

    id: int
    scheduled_at: datetime
    status: AppointmentStatus
    patient_name: str
    patient_phone: str | None = None
    patient_id: int | None = None
    clinic_location_id: int
    clinic_location_name: str | None = None
    diagnosis: str = ""
    notes: str = ""
    amount: Decimal = Decimal("0")
    updated_at: datetime
    updated_by: str

    model_config = {"from_attributes": True}

    @field_validator("scheduled_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Normalise stored timestamps to aware UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)

    @field_validator("diagnosis", "notes", mode="before")
    @classmethod
    def empty_text(cls, v: str | None) -> str:
        """Treat NULL text columns as empty."""
        return v or ""

    @field_validator("amount", mode="before")
    @classmethod
    def zero_amount(cls, v: Decimal | None) -> Decimal:
        """Treat a NULL amount as zero."""
        return Decimal("0") if v is None else v


class AppointmentListResponse(BaseModel):
    """Appointments for one local calendar day."""

    day: date
    time_zone: str
    clinic_location_id: int | None = None
    total: int
    items: list[AppointmentRecord]
