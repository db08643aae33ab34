"""Appointment service for business logic."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from decimal import Decimal

import structlog

from clinic_desk.core.exceptions import NotFoundException, PersistenceException, ValidationException
from clinic_desk.core.timezones import day_window, now_utc, to_utc_instant
from clinic_desk.core.validators import (
    validate_amount,
    validate_patient_name,
    validate_patient_phone,
    validate_status,
)
from clinic_desk.schemas.appointments import (
    AppointmentCreate,
    AppointmentRecord,
    AppointmentStatus,
    AppointmentUpdate,
)
from clinic_desk.services.appointment_persistence import AppointmentPersistence

logger = structlog.get_logger(__name__)


def _validate_actor(actor_name: str | None) -> str:
    if actor_name is None or not actor_name.strip():
        raise ValidationException("Actor name is required")
    return actor_name.strip()


class AppointmentService:
    """Service for booking and managing appointments."""

    def __init__(
        self,
        persistence: AppointmentPersistence,
        clock: Callable[[], datetime] = now_utc,
    ):
        """
        Initialize service.

        Args:
            persistence: Row storage for appointments
            clock: Source of the current instant, replaceable in tests
        """
        self.persistence = persistence
        self.clock = clock

    def _now(self) -> datetime:
        return self.clock().astimezone(UTC)

    async def create(self, data: AppointmentCreate) -> AppointmentRecord:
        """
        Book a new appointment.

        All fields are validated before anything is written. The new row
        always starts as ``scheduled`` with an empty diagnosis. Creation is
        not idempotent: repeating a call books a second appointment.

        Args:
            data: Booking input with local date-time and zone

        Returns:
            Created appointment including its assigned id

        Raises:
            InvalidNameException: If the patient name is blank or too long
            InvalidPhoneException: If a phone number is given and is invalid
            InvalidTimeZoneException: If the zone is unknown
            InvalidDateTimeException: If the local date-time cannot be parsed
            UnknownReferenceException: If the clinic location or patient does not exist
            PersistenceException: If the insert fails
        """
        patient_name = validate_patient_name(data.patient_name)
        patient_phone = validate_patient_phone(data.patient_phone)
        updated_by = _validate_actor(data.actor_name)
        scheduled_at = to_utc_instant(data.local_datetime, data.time_zone)

        values = {
            "scheduled_at": scheduled_at,
            "status": AppointmentStatus.SCHEDULED.value,
            "patient_name": patient_name,
            "patient_phone": patient_phone,
            "patient_id": data.patient_id,
            "clinic_location_id": data.clinic_location_id,
            "diagnosis": "",
            "notes": data.notes or "",
            "amount": Decimal("0"),
            # "now" is absolute; the caller's zone does not change it
            "updated_at": self._now(),
            "updated_by": updated_by,
        }

        appointment_id = await self.persistence.insert_appointment(values)

        logger.info(
            "appointment_created",
            appointment_id=appointment_id,
            clinic_location_id=data.clinic_location_id,
            scheduled_at=scheduled_at.isoformat(),
        )

        return AppointmentRecord(id=appointment_id, **values)

    async def list_by_day(
        self,
        calendar_date: str | date,
        time_zone: str,
        clinic_location_id: int | None = None,
    ) -> list[AppointmentRecord]:
        """
        List appointments falling on one local calendar day.

        A failed query is logged and reported as an empty day, so callers
        cannot tell "no appointments" apart from "storage unavailable".

        Args:
            calendar_date: Day to list, in the caller's calendar
            time_zone: IANA zone of that calendar
            clinic_location_id: Restrict to one clinic location

        Returns:
            Appointments ordered by scheduled time

        Raises:
            InvalidTimeZoneException: If the zone is unknown
            InvalidDateTimeException: If the date cannot be parsed
        """
        window = day_window(calendar_date, time_zone)

        try:
            rows = await self.persistence.query_appointments_in_range(
                window.start_utc,
                window.end_utc,
                clinic_location_id,
            )
        except PersistenceException as e:
            logger.error(
                "appointment_list_query_failed",
                calendar_date=str(calendar_date),
                time_zone=time_zone,
                clinic_location_id=clinic_location_id,
                error=e.message,
            )
            return []

        records = [AppointmentRecord.model_validate(row) for row in rows]
        return sorted(records, key=lambda record: record.scheduled_at)

    async def get(self, appointment_id: int) -> AppointmentRecord:
        """
        Get appointment by ID.

        Raises:
            NotFoundException: If appointment not found
        """
        row = await self.persistence.get_appointment_by_id(appointment_id)
        if row is None:
            raise NotFoundException(f"Appointment {appointment_id} not found")
        return AppointmentRecord.model_validate(row)

    async def update(self, appointment_id: int, data: AppointmentUpdate) -> AppointmentRecord:
        """
        Replace the mutable fields of an appointment.

        Any status may be set to any other status. Concurrent updates to the
        same appointment are not sequenced: the last write wins.

        Args:
            appointment_id: Appointment ID
            data: New values for every mutable field

        Returns:
            Updated appointment

        Raises:
            InvalidStatusException: If the status is not a known value
            InvalidNameException: If the patient name is blank or too long
            InvalidPhoneException: If a phone number is given and is invalid
            ValidationException: If the amount is negative or does not fit NUMERIC(10, 2)
            NotFoundException: If appointment not found
            UnknownReferenceException: If the clinic location does not exist
            PersistenceException: If the update fails
        """
        values = {
            "patient_name": validate_patient_name(data.patient_name),
            "patient_phone": validate_patient_phone(data.patient_phone),
            "status": validate_status(data.status).value,
            "diagnosis": data.diagnosis or "",
            "notes": data.notes or "",
            "amount": validate_amount(data.amount),
            "clinic_location_id": data.clinic_location_id,
            "updated_by": _validate_actor(data.actor_name),
            "updated_at": self._now(),
        }

        affected = await self.persistence.update_appointment_by_id(appointment_id, values)
        if affected == 0:
            raise NotFoundException(f"Appointment {appointment_id} not found")

        logger.info(
            "appointment_updated",
            appointment_id=appointment_id,
            status=values["status"],
            updated_by=values["updated_by"],
        )

        return await self.get(appointment_id)

    async def delete(self, appointment_id: int) -> None:
        """
        Permanently delete an appointment.

        Raises:
            NotFoundException: If appointment not found
            PersistenceException: If the delete fails
        """
        affected = await self.persistence.delete_appointment_by_id(appointment_id)
        if affected == 0:
            raise NotFoundException(f"Appointment {appointment_id} not found")

        logger.info("appointment_deleted", appointment_id=appointment_id)
