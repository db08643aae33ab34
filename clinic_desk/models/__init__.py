"""Database models."""

from clinic_desk.models.allowed_users import allowed_users
from clinic_desk.models.appointments import appointments
from clinic_desk.models.base import metadata
from clinic_desk.models.clinic_locations import clinic_locations
from clinic_desk.models.patients import patients

__all__ = [
    "allowed_users",
    "appointments",
    "clinic_locations",
    "metadata",
    "patients",
]
