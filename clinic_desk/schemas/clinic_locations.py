"""Clinic location schemas."""

from pydantic import BaseModel


class ClinicLocationResponse(BaseModel):
    """A clinic location."""

    id: int
    name: str

    model_config = {"from_attributes": True}
