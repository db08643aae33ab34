"""Tests for the SQL appointment storage against a mocked session."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError

from clinic_desk.core.exceptions import PersistenceException, UnknownReferenceException
from clinic_desk.services.appointment_persistence import SqlAppointmentPersistence
from clinic_desk.services.appointment_service import AppointmentService

START = datetime(2024, 1, 14, 18, 30, tzinfo=UTC)
END = datetime(2024, 1, 15, 18, 29, 59, 999000, tzinfo=UTC)


def executed_sql(mock_db) -> str:
    stmt = mock_db.execute.call_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect())).upper()


@pytest.mark.asyncio
async def test_insert_commits_and_returns_id(mock_db):
    result = MagicMock()
    result.scalar_one.return_value = 7
    mock_db.execute.return_value = result

    appointment_id = await SqlAppointmentPersistence(mock_db).insert_appointment(
        {"patient_name": "Asha", "scheduled_at": START, "clinic_location_id": 1}
    )

    assert appointment_id == 7
    mock_db.commit.assert_awaited_once()
    assert "RETURNING APPOINTMENTS.ID" in executed_sql(mock_db)


@pytest.mark.asyncio
async def test_query_uses_inclusive_range_and_location(mock_db):
    row = {"id": 1, "scheduled_at": START, "clinic_location_name": "Clinic 1"}
    result = MagicMock()
    result.mappings.return_value.all.return_value = [row]
    mock_db.execute.return_value = result

    rows = await SqlAppointmentPersistence(mock_db).query_appointments_in_range(START, END, 1)

    assert rows == [row]
    sql = executed_sql(mock_db)
    assert "BETWEEN" in sql
    assert "APPOINTMENTS.CLINIC_LOCATION_ID = " in sql
    assert "JOIN CLINIC_LOCATIONS" in sql
    assert "ORDER BY APPOINTMENTS.SCHEDULED_AT ASC" in sql
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_query_without_location_spans_all_clinics(mock_db):
    result = MagicMock()
    result.mappings.return_value.all.return_value = []
    mock_db.execute.return_value = result

    await SqlAppointmentPersistence(mock_db).query_appointments_in_range(START, END)

    assert "APPOINTMENTS.CLINIC_LOCATION_ID = " not in executed_sql(mock_db)


@pytest.mark.asyncio
async def test_update_and_delete_report_rowcount(mock_db):
    result = MagicMock()
    result.rowcount = 0
    mock_db.execute.return_value = result
    persistence = SqlAppointmentPersistence(mock_db)

    assert await persistence.update_appointment_by_id(5, {"status": "completed"}) == 0
    assert await persistence.delete_appointment_by_id(5) == 0

    result.rowcount = 1
    assert await persistence.delete_appointment_by_id(1) == 1


@pytest.mark.asyncio
async def test_get_missing_returns_none(mock_db):
    result = MagicMock()
    result.mappings.return_value.first.return_value = None
    mock_db.execute.return_value = result

    assert await SqlAppointmentPersistence(mock_db).get_appointment_by_id(99) is None


@pytest.mark.asyncio
async def test_database_error_rolls_back(mock_db):
    """Driver errors are rolled back and reported as persistence failures."""
    mock_db.execute.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

    with pytest.raises(PersistenceException) as exc_info:
        await SqlAppointmentPersistence(mock_db).insert_appointment({"patient_name": "Asha"})

    assert exc_info.value.status_code == 503
    mock_db.rollback.assert_awaited_once()
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [ConnectionRefusedError(111, "Connect call failed"), TimeoutError(), OSError("reset")],
)
async def test_connection_error_rolls_back(mock_db, error):
    """Errors raised by the driver outside SQLAlchemy still become 503s."""
    mock_db.execute.side_effect = error

    with pytest.raises(PersistenceException) as exc_info:
        await SqlAppointmentPersistence(mock_db).insert_appointment({"patient_name": "Asha"})

    assert exc_info.value.status_code == 503
    assert exc_info.value.__cause__ is error
    mock_db.rollback.assert_awaited_once()
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_rollback_still_reports_persistence_error(mock_db):
    mock_db.execute.side_effect = ConnectionRefusedError(111, "Connect call failed")
    mock_db.rollback.side_effect = ConnectionRefusedError(111, "Connect call failed")

    with pytest.raises(PersistenceException):
        await SqlAppointmentPersistence(mock_db).delete_appointment_by_id(1)


@pytest.mark.asyncio
async def test_refused_connection_lists_empty_day(mock_db):
    mock_db.execute.side_effect = ConnectionRefusedError(111, "Connect call failed")
    service = AppointmentService(SqlAppointmentPersistence(mock_db))

    assert await service.list_by_day("2024-03-01", "Asia/Kolkata") == []


@pytest.mark.asyncio
async def test_foreign_key_violation_is_unknown_reference(mock_db):
    """An unknown clinic location is the caller's error, not a storage outage."""
    mock_db.execute.side_effect = IntegrityError(
        "INSERT",
        {},
        Exception(
            'insert or update on table "appointments" violates foreign key constraint '
            '"appointments_clinic_location_id_fkey"'
        ),
    )

    with pytest.raises(UnknownReferenceException) as exc_info:
        await SqlAppointmentPersistence(mock_db).insert_appointment({"clinic_location_id": 99})

    assert exc_info.value.status_code == 400
    assert exc_info.value.code == "unknown_reference"
    mock_db.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_other_integrity_error_is_persistence_error(mock_db):
    mock_db.execute.side_effect = IntegrityError(
        "UPDATE",
        {},
        Exception('new row for relation "appointments" violates check constraint'),
    )

    with pytest.raises(PersistenceException) as exc_info:
        await SqlAppointmentPersistence(mock_db).update_appointment_by_id(1, {"status": "completed"})

    assert exc_info.value.status_code == 503
