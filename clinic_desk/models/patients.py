"""Patient model definition using SQLAlchemy Core."""

from sqlalchemy import Column, Date, DateTime, Integer, String, Table, Text, text

from clinic_desk.models.base import metadata

patients = Table(
    "patients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, index=True),
    Column("dob", Date),
    Column("sex", String(20)),
    # Contact
    Column("email", Text),
    Column("phone", String(10), index=True),
    Column("address", Text),
    Column("medical_history", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
