"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

from clinic_desk.models.base import metadata

appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Canonical appointment time, always UTC
    Column("scheduled_at", TIMESTAMP(timezone=True), nullable=False),
    Column("status", Text, nullable=False, server_default=text("'scheduled'")),
    # Snapshot of patient identity (kept even when patient_id is set)
    Column("patient_name", String(100), nullable=False),
    Column("patient_phone", String(10), nullable=True),
    Column(
        "patient_id",
        Integer,
        ForeignKey("patients.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "clinic_location_id",
        Integer,
        ForeignKey("clinic_locations.id"),
        nullable=False,
    ),
    # Visit outcome
    Column("diagnosis", Text, nullable=False, server_default=text("''")),
    Column("notes", Text, nullable=False, server_default=text("''")),
    Column("amount", Numeric(10, 2), nullable=False, server_default=text("0")),
    # Audit
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")),
    Column("updated_by", Text, nullable=False),
    CheckConstraint(
        "status IN ('scheduled', 'completed', 'cancelled')",
        name="appointments_status_check",
    ),
    CheckConstraint("amount >= 0", name="appointments_amount_check"),
)

Index("idx_appointments_scheduled_at", appointments.c.scheduled_at)
Index(
    "idx_appointments_location_scheduled_at",
    appointments.c.clinic_location_id,
    appointments.c.scheduled_at,
)
