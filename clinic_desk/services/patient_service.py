"""Patient roster service."""

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_desk.core.exceptions import NotFoundException
from clinic_desk.models.patients import patients
from clinic_desk.schemas.patients import PatientCreate, PatientUpdate

logger = structlog.get_logger(__name__)


class PatientService:
    """Service for managing the patient roster."""

    # Autocomplete suggestions shown while typing a phone number
    SEARCH_LIMIT = 5

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def list_patients(self) -> list[dict]:
        """Get all patients ordered by name."""
        result = await self.db.execute(select(patients).order_by(patients.c.name))
        return [dict(row) for row in result.mappings().all()]

    async def get_patient(self, patient_id: int) -> dict:
        """
        Get patient by ID.

        Raises:
            NotFoundException: If patient not found
        """
        result = await self.db.execute(select(patients).where(patients.c.id == patient_id))
        row = result.mappings().first()
        if not row:
            raise NotFoundException("Patient not found")
        return dict(row)

    async def create_patient(self, data: PatientCreate) -> dict:
        """Register a new patient."""
        stmt = insert(patients).values(**data.model_dump()).returning(patients)
        result = await self.db.execute(stmt)
        await self.db.commit()

        row = result.mappings().first()
        logger.info("patient_created", patient_id=row["id"])
        return dict(row)

    async def update_patient(self, patient_id: int, data: PatientUpdate) -> dict:
        """
        Replace a patient's details.

        Raises:
            NotFoundException: If patient not found
        """
        stmt = (
            update(patients)
            .where(patients.c.id == patient_id)
            .values(**data.model_dump())
            .returning(patients)
        )
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        if not row:
            await self.db.rollback()
            raise NotFoundException("Patient not found")

        await self.db.commit()
        return dict(row)

    async def delete_patient(self, patient_id: int) -> None:
        """
        Delete a patient; their appointments keep the stored name and phone.

        Raises:
            NotFoundException: If patient not found
        """
        result = await self.db.execute(delete(patients).where(patients.c.id == patient_id))
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundException("Patient not found")

        await self.db.commit()
        logger.info("patient_deleted", patient_id=patient_id)

    async def search_by_phone(self, phone: str) -> list[dict]:
        """Find patients whose phone contains the given digits."""
        stmt = (
            select(patients)
            .where(patients.c.phone.contains(phone, autoescape=True))
            .order_by(patients.c.name)
            .limit(self.SEARCH_LIMIT)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
