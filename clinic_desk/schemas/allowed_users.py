"""Allowlist schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class AllowedUserCreate(BaseModel):
    """Schema for adding a user to the allowlist."""

    email: EmailStr
    name: str | None = Field(None, max_length=200)
    is_admin: bool = False

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        """Store emails lowercased so lookups are case-insensitive."""
        return v.lower()


class AllowedUserUpdate(AllowedUserCreate):
    """Schema for replacing an allowlist entry."""


class AllowedUserResponse(BaseModel):
    """Schema for allowlist entry response."""

    id: int
    email: str
    name: str | None = None
    is_admin: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AllowedUserListResponse(BaseModel):
    """List of allowlist entries."""

    total: int
    users: list[AllowedUserResponse]
