"""Clinic location lookups."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_desk.core.exceptions import NotFoundException
from clinic_desk.models.clinic_locations import clinic_locations


class ClinicLocationService:
    """Service for clinic locations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def list_locations(self) -> list[dict]:
        """Get all clinic locations."""
        result = await self.db.execute(select(clinic_locations).order_by(clinic_locations.c.id))
        return [dict(row) for row in result.mappings().all()]

    async def get_location(self, location_id: int) -> dict:
        """
        Get clinic location by ID.

        Raises:
            NotFoundException: If location not found
        """
        result = await self.db.execute(
            select(clinic_locations).where(clinic_locations.c.id == location_id)
        )
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Clinic location not found")
        return dict(row)
