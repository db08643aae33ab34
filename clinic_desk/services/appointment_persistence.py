"""Row access for appointments."""

import asyncio
from datetime import datetime
from typing import Any, Protocol

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_desk.core.exceptions import PersistenceException, UnknownReferenceException
from clinic_desk.models.appointments import appointments
from clinic_desk.models.clinic_locations import clinic_locations

logger = structlog.get_logger(__name__)

FOREIGN_KEY_VIOLATION = "23503"

# Connection failures from the driver are not wrapped by SQLAlchemy
STORAGE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    code = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
    return code == FOREIGN_KEY_VIOLATION or "foreign key" in str(error.orig).lower()


class AppointmentPersistence(Protocol):
    """Storage operations the appointment scheduler relies on."""

    async def insert_appointment(self, values: dict[str, Any]) -> int:
        """Insert a row and return its id."""
        ...

    async def query_appointments_in_range(
        self,
        start_utc: datetime,
        end_utc: datetime,
        clinic_location_id: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return rows scheduled within [start_utc, end_utc], earliest first."""
        ...

    async def update_appointment_by_id(self, appointment_id: int, values: dict[str, Any]) -> int:
        """Update a row and return the number of rows affected."""
        ...

    async def delete_appointment_by_id(self, appointment_id: int) -> int:
        """Delete a row and return the number of rows affected."""
        ...

    async def get_appointment_by_id(self, appointment_id: int) -> dict[str, Any] | None:
        """Return one row or None."""
        ...


class SqlAppointmentPersistence:
    """AppointmentPersistence backed by the relational database."""

    def __init__(self, db: AsyncSession):
        """Initialize with database session."""
        self.db = db

    @staticmethod
    def _select_with_location():
        return select(
            appointments,
            clinic_locations.c.name.label("clinic_location_name"),
        ).select_from(
            appointments.join(
                clinic_locations,
                clinic_locations.c.id == appointments.c.clinic_location_id,
            )
        )

    async def _execute(self, stmt: Any, operation: str, commit: bool = False) -> Any:
        try:
            result = await self.db.execute(stmt)
            if commit:
                await self.db.commit()
            return result
        except IntegrityError as e:
            await self._rollback(operation)
            if _is_foreign_key_violation(e):
                raise UnknownReferenceException(
                    "Clinic location or patient does not exist"
                ) from e
            logger.error("appointment_persistence_failed", operation=operation, error=str(e))
            raise PersistenceException(f"Database error during {operation}") from e
        except STORAGE_ERRORS as e:
            await self._rollback(operation)
            logger.error("appointment_persistence_failed", operation=operation, error=str(e))
            raise PersistenceException(f"Database error during {operation}") from e

    async def _rollback(self, operation: str) -> None:
        try:
            await self.db.rollback()
        except STORAGE_ERRORS as e:
            # The connection may already be gone
            logger.warning("appointment_rollback_failed", operation=operation, error=str(e))

    async def insert_appointment(self, values: dict[str, Any]) -> int:
        stmt = insert(appointments).values(**values).returning(appointments.c.id)
        result = await self._execute(stmt, "insert", commit=True)
        return result.scalar_one()

    async def query_appointments_in_range(
        self,
        start_utc: datetime,
        end_utc: datetime,
        clinic_location_id: int | None = None,
    ) -> list[dict[str, Any]]:
        stmt = self._select_with_location().where(
            appointments.c.scheduled_at.between(start_utc, end_utc)
        )
        if clinic_location_id is not None:
            stmt = stmt.where(appointments.c.clinic_location_id == clinic_location_id)
        stmt = stmt.order_by(appointments.c.scheduled_at.asc(), appointments.c.id.asc())

        result = await self._execute(stmt, "query")
        return [dict(row) for row in result.mappings().all()]

    async def update_appointment_by_id(self, appointment_id: int, values: dict[str, Any]) -> int:
        stmt = update(appointments).where(appointments.c.id == appointment_id).values(**values)
        result = await self._execute(stmt, "update", commit=True)
        return result.rowcount

    async def delete_appointment_by_id(self, appointment_id: int) -> int:
        stmt = delete(appointments).where(appointments.c.id == appointment_id)
        result = await self._execute(stmt, "delete", commit=True)
        return result.rowcount

    async def get_appointment_by_id(self, appointment_id: int) -> dict[str, Any] | None:
        stmt = self._select_with_location().where(appointments.c.id == appointment_id)
        result = await self._execute(stmt, "get")
        row = result.mappings().first()
        return dict(row) if row else None
