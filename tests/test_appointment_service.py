"""Tests for the appointment scheduler."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from clinic_desk.core.exceptions import (
    InvalidDateTimeException,
    InvalidNameException,
    InvalidPhoneException,
    InvalidStatusException,
    InvalidTimeZoneException,
    NotFoundException,
    PersistenceException,
    ValidationException,
)
from clinic_desk.schemas.appointments import (
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
)
from clinic_desk.services.appointment_service import AppointmentService


def booking(**overrides) -> AppointmentCreate:
    values = {
        "patient_name": "Asha",
        "patient_phone": "9876543210",
        "local_datetime": "2024-03-01T10:00",
        "time_zone": "Asia/Kolkata",
        "clinic_location_id": 1,
        "actor_name": "Dr. Rao",
    }
    values.update(overrides)
    return AppointmentCreate(**values)


def changes(**overrides) -> AppointmentUpdate:
    values = {
        "patient_name": "Asha",
        "patient_phone": "9876543210",
        "status": "completed",
        "diagnosis": "Viral fever",
        "notes": "Follow up in a week",
        "amount": Decimal("500"),
        "clinic_location_id": 1,
        "actor_name": "Dr. Mehta",
    }
    values.update(overrides)
    return AppointmentUpdate(**values)


@pytest.mark.asyncio
async def test_create_stores_utc_instant(appointment_service, persistence, fixed_now):
    """Local 10:00 in Kolkata is stored as 04:30 UTC, scheduled, with no diagnosis."""
    record = await appointment_service.create(booking())

    assert record.id == 1
    assert record.scheduled_at == datetime(2024, 3, 1, 4, 30, tzinfo=UTC)
    assert record.status == AppointmentStatus.SCHEDULED
    assert record.diagnosis == ""
    assert record.amount == Decimal("0")
    assert record.updated_by == "Dr. Rao"
    assert record.updated_at == fixed_now

    stored = persistence.rows[1]
    assert stored["scheduled_at"] == datetime(2024, 3, 1, 4, 30, tzinfo=UTC)
    assert stored["status"] == "scheduled"
    assert persistence.calls == ["insert"]


@pytest.mark.asyncio
async def test_create_trims_name_and_allows_missing_phone(appointment_service):
    """Blank phone numbers are stored as absent."""
    record = await appointment_service.create(booking(patient_name="  Ravi  ", patient_phone=""))
    assert record.patient_name == "Ravi"
    assert record.patient_phone is None


@pytest.mark.asyncio
async def test_create_invalid_phone_writes_nothing(appointment_service, persistence):
    """A malformed phone number is rejected before storage is touched."""
    with pytest.raises(InvalidPhoneException):
        await appointment_service.create(booking(patient_phone="12345"))

    assert persistence.calls == []
    assert persistence.rows == {}


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", "x" * 101])
async def test_create_invalid_name_writes_nothing(appointment_service, persistence, name):
    """Blank or over-long names are rejected."""
    with pytest.raises(InvalidNameException):
        await appointment_service.create(booking(patient_name=name))
    assert persistence.calls == []


@pytest.mark.asyncio
async def test_create_invalid_zone_and_datetime(appointment_service, persistence):
    """Bad zone or date-time never reaches storage."""
    with pytest.raises(InvalidTimeZoneException):
        await appointment_service.create(booking(time_zone="Not/AZone"))
    with pytest.raises(InvalidDateTimeException):
        await appointment_service.create(booking(local_datetime="next tuesday"))
    assert persistence.calls == []


@pytest.mark.asyncio
async def test_create_requires_actor(appointment_service, persistence):
    """Every write records who made it."""
    with pytest.raises(ValidationException):
        await appointment_service.create(booking(actor_name="  "))
    assert persistence.calls == []


@pytest.mark.asyncio
async def test_create_is_not_idempotent(appointment_service, persistence):
    """Repeating a booking creates a second appointment."""
    first = await appointment_service.create(booking())
    second = await appointment_service.create(booking())

    assert first.id != second.id
    assert len(persistence.rows) == 2


@pytest.mark.asyncio
async def test_create_propagates_storage_failure(appointment_service, persistence):
    """Insert failures are not swallowed."""
    persistence.fail = True
    with pytest.raises(PersistenceException):
        await appointment_service.create(booking())


@pytest.mark.asyncio
async def test_list_by_day_window_is_inclusive(appointment_service, persistence):
    """Appointments at local midnight and 23:59:59.999 both belong to the day."""
    await appointment_service.create(booking(local_datetime="2024-01-15T00:00:00"))
    await appointment_service.create(booking(local_datetime="2024-01-15T23:59:59.999"))
    await appointment_service.create(booking(local_datetime="2024-01-16T00:00:00"))
    await appointment_service.create(booking(local_datetime="2024-01-14T23:59:59.999"))

    records = await appointment_service.list_by_day("2024-01-15", "Asia/Kolkata")

    assert [record.id for record in records] == [1, 2]
    assert records[0].scheduled_at == datetime(2024, 1, 14, 18, 30, tzinfo=UTC)
    assert records[1].scheduled_at == datetime(2024, 1, 15, 18, 29, 59, 999000, tzinfo=UTC)


@pytest.mark.asyncio
async def test_list_by_day_is_ordered_and_filtered(appointment_service):
    """Results are sorted by time and limited to the requested clinic."""
    await appointment_service.create(booking(local_datetime="2024-03-01T15:00"))
    await appointment_service.create(
        booking(local_datetime="2024-03-01T11:00", clinic_location_id=2)
    )
    await appointment_service.create(booking(local_datetime="2024-03-01T09:00"))

    all_locations = await appointment_service.list_by_day("2024-03-01", "Asia/Kolkata")
    clinic_one = await appointment_service.list_by_day("2024-03-01", "Asia/Kolkata", 1)

    assert [record.id for record in all_locations] == [3, 2, 1]
    assert [record.id for record in clinic_one] == [3, 1]
    assert clinic_one[0].clinic_location_name == "Clinic 1"


@pytest.mark.asyncio
async def test_list_by_day_depends_on_zone(appointment_service):
    """The same instant can fall on different days in different zones."""
    await appointment_service.create(
        booking(local_datetime="2024-03-01T23:00", time_zone="America/New_York")
    )

    assert len(await appointment_service.list_by_day("2024-03-01", "America/New_York")) == 1
    assert await appointment_service.list_by_day("2024-03-01", "Asia/Kolkata") == []
    assert len(await appointment_service.list_by_day("2024-03-02", "Asia/Kolkata")) == 1


@pytest.mark.asyncio
async def test_list_by_day_query_failure_returns_empty(appointment_service, persistence):
    """Storage errors while listing read as an empty day."""
    persistence.fail = True
    assert await appointment_service.list_by_day("2024-03-01", "Asia/Kolkata") == []
    assert persistence.calls == ["query"]


@pytest.mark.asyncio
async def test_list_by_day_invalid_zone(appointment_service, persistence):
    """Zone errors are reported, not hidden as an empty day."""
    with pytest.raises(InvalidTimeZoneException):
        await appointment_service.list_by_day("2024-03-01", "Atlantis/Capital")
    assert persistence.calls == []


@pytest.mark.asyncio
async def test_update_replaces_mutable_fields(persistence):
    """Update writes every field and stamps the new actor and time."""
    times = iter(
        [
            datetime(2024, 3, 1, 3, 0, tzinfo=UTC),
            datetime(2024, 3, 1, 6, 0, tzinfo=UTC),
        ]
    )
    service = AppointmentService(persistence, clock=lambda: next(times))
    created = await service.create(booking())

    updated = await service.update(created.id, changes())

    assert updated.status == AppointmentStatus.COMPLETED
    assert updated.diagnosis == "Viral fever"
    assert updated.notes == "Follow up in a week"
    assert updated.amount == Decimal("500")
    assert updated.updated_by == "Dr. Mehta"
    assert updated.updated_at == datetime(2024, 3, 1, 6, 0, tzinfo=UTC)
    assert updated.scheduled_at == created.scheduled_at


@pytest.mark.asyncio
async def test_update_allows_any_status_transition(appointment_service):
    """Cancelled and completed appointments may be rescheduled again."""
    created = await appointment_service.create(booking())

    for status in ["cancelled", "completed", "scheduled", "cancelled"]:
        record = await appointment_service.update(created.id, changes(status=status))
        assert record.status.value == status


@pytest.mark.asyncio
async def test_update_defaults_status_and_amount(appointment_service):
    """Missing status means scheduled and a missing amount means zero."""
    created = await appointment_service.create(booking())
    record = await appointment_service.update(
        created.id, changes(status=None, amount=None, diagnosis=None)
    )

    assert record.status == AppointmentStatus.SCHEDULED
    assert record.amount == Decimal("0")
    assert record.diagnosis == ""


@pytest.mark.asyncio
async def test_update_invalid_status_changes_nothing(appointment_service, persistence):
    """Unknown statuses are rejected before the update is issued."""
    created = await appointment_service.create(booking())
    before = dict(persistence.rows[created.id])

    with pytest.raises(InvalidStatusException):
        await appointment_service.update(created.id, changes(status="confirmed"))

    assert persistence.rows[created.id] == before
    assert persistence.calls == ["insert"]


@pytest.mark.asyncio
async def test_update_missing_appointment(appointment_service, persistence):
    """Updating an id that does not exist leaves storage as it was."""
    await appointment_service.create(booking())
    before = {key: dict(row) for key, row in persistence.rows.items()}

    with pytest.raises(NotFoundException):
        await appointment_service.update(5, changes())

    assert persistence.rows == before


@pytest.mark.asyncio
async def test_get_missing_appointment(appointment_service):
    with pytest.raises(NotFoundException):
        await appointment_service.get(42)


@pytest.mark.asyncio
async def test_delete_removes_appointment(appointment_service, persistence):
    """Deleted appointments are gone from listings and lookups."""
    created = await appointment_service.create(booking())

    await appointment_service.delete(created.id)

    assert persistence.rows == {}
    assert await appointment_service.list_by_day("2024-03-01", "Asia/Kolkata") == []
    with pytest.raises(NotFoundException):
        await appointment_service.delete(created.id)


@pytest.mark.asyncio
async def test_updated_at_is_normalised_to_utc(persistence):
    """The audit timestamp is always UTC, whatever zone the clock reports in."""
    kolkata_now = datetime(2024, 3, 1, 8, 30, tzinfo=ZoneInfo("Asia/Kolkata"))
    service = AppointmentService(persistence, clock=lambda: kolkata_now)

    record = await service.create(booking())

    assert record.updated_at == datetime(2024, 3, 1, 3, 0, tzinfo=UTC)
    assert record.updated_at.utcoffset() == timedelta(0)
