"""Allowlist of staff permitted to use the front desk."""

import structlog
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_desk.core.exceptions import ConflictException, NotFoundException
from clinic_desk.models.allowed_users import allowed_users
from clinic_desk.schemas.allowed_users import AllowedUserCreate, AllowedUserUpdate

logger = structlog.get_logger(__name__)


class AllowedUserService:
    """Service for allowlist entries."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def list_users(self) -> list[dict]:
        """Get all allowlist entries, newest first."""
        result = await self.db.execute(
            select(allowed_users).order_by(allowed_users.c.created_at.desc())
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_user(self, user_id: int) -> dict | None:
        """Get allowlist entry by ID."""
        result = await self.db.execute(select(allowed_users).where(allowed_users.c.id == user_id))
        row = result.mappings().first()
        return dict(row) if row else None

    async def get_user_by_email(self, email: str) -> dict | None:
        """Get allowlist entry by email, ignoring case."""
        result = await self.db.execute(
            select(allowed_users).where(func.lower(allowed_users.c.email) == email.lower())
        )
        row = result.mappings().first()
        return dict(row) if row else None

    async def add_user(self, data: AllowedUserCreate) -> dict:
        """
        Add an email to the allowlist.

        Raises:
            ConflictException: If the email is already allowed
        """
        if await self.get_user_by_email(data.email):
            raise ConflictException("User is already on the allowlist")

        stmt = insert(allowed_users).values(**data.model_dump()).returning(allowed_users)
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("User is already on the allowlist") from e

        row = result.mappings().first()
        logger.info("allowed_user_added", email=data.email, is_admin=data.is_admin)
        return dict(row)

    async def update_user(self, user_id: int, data: AllowedUserUpdate) -> dict:
        """
        Replace an allowlist entry.

        Raises:
            NotFoundException: If entry not found
            ConflictException: If the new email belongs to another entry
        """
        stmt = (
            update(allowed_users)
            .where(allowed_users.c.id == user_id)
            .values(**data.model_dump())
            .returning(allowed_users)
        )
        try:
            result = await self.db.execute(stmt)
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("Email belongs to another allowlist entry") from e

        row = result.mappings().first()
        if not row:
            await self.db.rollback()
            raise NotFoundException("User not found")

        await self.db.commit()
        return dict(row)

    async def delete_user(self, user_id: int) -> None:
        """
        Remove an allowlist entry.

        Raises:
            NotFoundException: If entry not found
        """
        result = await self.db.execute(delete(allowed_users).where(allowed_users.c.id == user_id))
        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundException("User not found")

        await self.db.commit()
        logger.info("allowed_user_removed", user_id=user_id)
