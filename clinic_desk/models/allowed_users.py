"""Allowlist of staff permitted to sign in."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Table, Text, text

from clinic_desk.models.base import metadata

allowed_users = Table(
    "allowed_users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", Text, nullable=False, unique=True, index=True),
    Column("name", Text),
    Column("is_admin", Boolean, nullable=False, server_default=text("false")),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=text("NOW()")),
)
