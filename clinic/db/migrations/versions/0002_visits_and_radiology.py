"""Patient visits and radiology ordering.

Revision ID: 0002_visits_and_radiology
Revises: 0001_initial_schema
Create Date: 2026-10-19
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0002_visits_and_radiology"
down_revision = "0001_initial_schema"
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None

visit_status_enum = sa.Enum("SCHEDULED", "IN_PROGRESS", "COMPLETED", "CANCELLED", name="visit_status")
radiology_order_status_enum = sa.Enum("PENDING", "COMPLETED", "CANCELLED", name="radiology_order_status")

ENUMS = (visit_status_enum, radiology_order_status_enum)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
    )


def _organisation_id() -> sa.Column:
    return sa.Column(
        "organisation_id",
        sa.Integer(),
        sa.ForeignKey("organisation.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def upgrade() -> None:
    bind = op.get_bind()
    for enum in ENUMS:
        enum.create(bind, checkfirst=True)

    op.create_table(
        "patient_visit",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column(
            "patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="CASCADE"), nullable=False, index=True
        ),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("doctor.id", ondelete="SET NULL"), nullable=True),
        sa.Column(
            "appointment_id",
            sa.Integer(),
            sa.ForeignKey("patient_appointment.id", ondelete="SET NULL"),
            nullable=True,
            unique=True,
        ),
        sa.Column("visit_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=True),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.Column("status", visit_status_enum, nullable=False, server_default="SCHEDULED"),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        _created_at(),
    )
    op.create_index("ix_visit_date", "patient_visit", ["organisation_id", "visit_date"])

    op.create_table(
        "radiology_exam_type",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("category", sa.String(length=120), nullable=True),
        _created_at(),
    )

    op.create_table(
        "radiology_order",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column(
            "patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="CASCADE"), nullable=False, index=True
        ),
        sa.Column(
            "visit_id", sa.Integer(), sa.ForeignKey("patient_visit.id", ondelete="CASCADE"), nullable=True, index=True
        ),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("doctor.id", ondelete="SET NULL"), nullable=True),
        sa.Column("exam_type_id", sa.Integer(), sa.ForeignKey("radiology_exam_type.id"), nullable=False),
        sa.Column("ordered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", radiology_order_status_enum, nullable=False, server_default="PENDING"),
        sa.Column("result", sa.String(length=2000), nullable=True),
        sa.Column("result_date", sa.Date(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _created_at(),
    )


def downgrade() -> None:
    for table in ("radiology_order", "radiology_exam_type", "patient_visit"):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in reversed(ENUMS):
        enum.drop(bind, checkfirst=True)
