"""Patient schemas for request/response validation."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from clinic_desk.core.validators import PHONE_PATTERN


class PatientBase(BaseModel):
    """Base patient schema with common fields."""

    name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = None
    sex: str | None = Field(None, max_length=20)
    dob: date | None = None
    email: EmailStr | None = None
    address: str | None = None
    medical_history: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Patient name is required")
        return v

    @field_validator("phone", "email", "sex", "address", "medical_history", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Forms send empty strings for untouched fields."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        """Validate 10-digit Indian mobile number."""
        if v is not None and not PHONE_PATTERN.match(v.strip()):
            raise ValueError("Invalid Indian mobile number")
        return v.strip() if v else v


class PatientCreate(PatientBase):
    """Schema for registering a patient."""


class PatientUpdate(PatientBase):
    """Schema for replacing a patient's details."""


class PatientResponse(PatientBase):
    """Schema for patient response."""

    id: int
    email: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PatientListResponse(BaseModel):
    """List of patients."""

    total: int
    items: list[PatientResponse]
