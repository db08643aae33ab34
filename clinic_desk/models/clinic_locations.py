"""Clinic location table model using SQLAlchemy Core."""

from sqlalchemy import Column, Integer, Table, Text

from clinic_desk.models.base import metadata

clinic_locations = Table(
    "clinic_locations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
)
