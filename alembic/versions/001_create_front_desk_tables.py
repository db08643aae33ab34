"""Create clinic locations, patients, allowlist and appointments tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "clinic_locations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "patients",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("sex", sa.String(length=20), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=10), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("medical_history", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_patients_name", "patients", ["name"])
    op.create_index("ix_patients_phone", "patients", ["phone"])

    op.create_table(
        "allowed_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("is_admin", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_allowed_users_email", "allowed_users", ["email"], unique=True)

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("scheduled_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("status", sa.Text(), server_default=sa.text("'scheduled'"), nullable=False),
        sa.Column("patient_name", sa.String(length=100), nullable=False),
        sa.Column("patient_phone", sa.String(length=10), nullable=True),
        sa.Column("patient_id", sa.Integer(), nullable=True),
        sa.Column("clinic_location_id", sa.Integer(), nullable=False),
        sa.Column("diagnosis", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("notes", sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column("updated_by", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["patient_id"], ["patients.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["clinic_location_id"], ["clinic_locations.id"]),
        sa.CheckConstraint(
            "status IN ('scheduled', 'completed', 'cancelled')",
            name="appointments_status_check",
        ),
        sa.CheckConstraint("amount >= 0", name="appointments_amount_check"),
    )
    op.create_index("idx_appointments_scheduled_at", "appointments", ["scheduled_at"])
    op.create_index(
        "idx_appointments_location_scheduled_at",
        "appointments",
        ["clinic_location_id", "scheduled_at"],
    )

    # The front desk starts with a single clinic
    op.execute("INSERT INTO clinic_locations (name) VALUES ('Clinic 1')")


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index("idx_appointments_location_scheduled_at", table_name="appointments")
    op.drop_index("idx_appointments_scheduled_at", table_name="appointments")
    op.drop_table("appointments")
    op.drop_index("ix_allowed_users_email", table_name="allowed_users")
    op.drop_table("allowed_users")
    op.drop_index("ix_patients_phone", table_name="patients")
    op.drop_index("ix_patients_name", table_name="patients")
    op.drop_table("patients")
    op.drop_table("clinic_locations")
