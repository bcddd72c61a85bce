"""Initial schema for the clinic practice domain.

Revision ID: 0001_initial_schema
Revises: 
Create Date: 2026-10-19
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None

# Enum columns persist member names.
user_role_enum = sa.Enum("ADMIN", "CABINET_MANAGER", "DOCTOR", "SECRETARY", name="user_role")
doctor_status_enum = sa.Enum("ENABLED", "DISABLED", name="doctor_status")
appointment_status_enum = sa.Enum("SCHEDULED", "COMPLETED", "CANCELLED", "NO_SHOW", name="appointment_status")
invoice_payment_status_enum = sa.Enum("PENDING", "PARTIAL", "PAID", name="invoice_payment_status")
payment_method_enum = sa.Enum(
    "CASH", "CARD", "BANK_TRANSFER", "CHEQUE", "INSURANCE", "MOBILE_MONEY", "OTHER", name="payment_method"
)
lab_order_status_enum = sa.Enum("PENDING", "COMPLETED", "CANCELLED", name="lab_order_status")

ENUMS = (
    user_role_enum,
    doctor_status_enum,
    appointment_status_enum,
    invoice_payment_status_enum,
    payment_method_enum,
    lab_order_status_enum,
)

ORGANISATION_PK = "organisation.id"
MONEY = sa.Numeric(12, 2)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
    )


def _organisation_id() -> sa.Column:
    return sa.Column(
        "organisation_id",
        sa.Integer(),
        sa.ForeignKey(ORGANISATION_PK, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


def upgrade() -> None:
    bind = op.get_bind()
    for enum in ENUMS:
        enum.create(bind, checkfirst=True)

    op.create_table(
        "organisation",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("phone_number", sa.String(length=40), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        _created_at(),
    )

    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "organisation_id",
            sa.Integer(),
            sa.ForeignKey(ORGANISATION_PK, ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("role", user_role_enum, nullable=True),
        _created_at(),
    )

    op.create_table(
        "user_session",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("token", sa.String(length=128), nullable=False, unique=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
    )

    op.create_table(
        "lab_test_type",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("category", sa.String(length=120), nullable=True),
        sa.Column("default_unit", sa.String(length=32), nullable=True),
        sa.Column("default_reference_range", sa.String(length=64), nullable=True),
        _created_at(),
    )

    op.create_table(
        "patient",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("birthdate", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("phone_number", sa.String(length=40), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        _created_at(),
    )
    op.create_index("ix_patient_name", "patient", ["organisation_id", "name"])

    op.create_table(
        "doctor",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("specialty", sa.String(length=120), nullable=True),
        sa.Column("phone_number", sa.String(length=40), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("status", doctor_status_enum, nullable=False, server_default="ENABLED"),
        _created_at(),
    )

    op.create_table(
        "patient_appointment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("doctor.id", ondelete="SET NULL"), nullable=True),
        sa.Column("appointment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("appointment_type", sa.String(length=64), nullable=True),
        sa.Column("status", appointment_status_enum, nullable=False, server_default="SCHEDULED"),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        _created_at(),
    )
    op.create_index("ix_appointment_date", "patient_appointment", ["organisation_id", "appointment_date"])

    op.create_table(
        "prescription",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("doctor.id", ondelete="SET NULL"), nullable=True),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        _created_at(),
    )

    op.create_table(
        "service",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("amount", MONEY, nullable=False),
        _created_at(),
        sa.UniqueConstraint("organisation_id", "code", name="uq_service_code_per_organisation"),
    )

    op.create_table(
        "invoice",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="SET NULL"), nullable=True),
        sa.Column("invoice_number", sa.String(length=32), nullable=False),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("payment_status", invoice_payment_status_enum, nullable=False, server_default="PENDING"),
        sa.Column("total_amount", MONEY, nullable=False, server_default="0"),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        _created_at(),
        sa.UniqueConstraint("organisation_id", "invoice_number", name="uq_invoice_number_per_organisation"),
    )
    op.create_index("ix_invoice_payment_status", "invoice", ["organisation_id", "payment_status"])

    op.create_table(
        "invoice_line",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column(
            "invoice_id", sa.Integer(), sa.ForeignKey("invoice.id", ondelete="CASCADE"), nullable=False, index=True
        ),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("service.id", ondelete="SET NULL"), nullable=True),
        sa.Column("service_name", sa.String(length=255), nullable=False),
        sa.Column("service_code", sa.String(length=32), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("unit_price", MONEY, nullable=False),
        sa.Column("line_total", MONEY, nullable=False),
        _created_at(),
    )

    op.create_table(
        "payment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="SET NULL"), nullable=True),
        sa.Column("amount", MONEY, nullable=False),
        sa.Column("payment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("payment_method", payment_method_enum, nullable=False, server_default="CASH"),
        sa.Column("receipt_number", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _created_at(),
    )
    op.create_index("ix_payment_date", "payment", ["organisation_id", "payment_date"])

    op.create_table(
        "payment_application",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column(
            "payment_id", sa.Integer(), sa.ForeignKey("payment.id", ondelete="CASCADE"), nullable=False, index=True
        ),
        sa.Column(
            "invoice_id", sa.Integer(), sa.ForeignKey("invoice.id", ondelete="CASCADE"), nullable=False, index=True
        ),
        sa.Column(
            "invoice_line_id", sa.Integer(), sa.ForeignKey("invoice_line.id", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("amount_applied", MONEY, nullable=False),
        sa.Column("applied_date", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
    )

    op.create_table(
        "lab_test_order",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _organisation_id(),
        sa.Column(
            "patient_id", sa.Integer(), sa.ForeignKey("patient.id", ondelete="CASCADE"), nullable=False, index=True
        ),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("doctor.id", ondelete="SET NULL"), nullable=True),
        sa.Column("test_type_id", sa.Integer(), sa.ForeignKey("lab_test_type.id"), nullable=False),
        sa.Column("ordered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", lab_order_status_enum, nullable=False, server_default="PENDING"),
        sa.Column("result_value", sa.String(length=64), nullable=True),
        sa.Column("result_unit", sa.String(length=32), nullable=True),
        sa.Column("reference_range", sa.String(length=64), nullable=True),
        sa.Column("result_flag", sa.String(length=16), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        _created_at(),
    )


def downgrade() -> None:
    for table in (
        "lab_test_order",
        "payment_application",
        "payment",
        "invoice_line",
        "invoice",
        "service",
        "prescription",
        "patient_appointment",
        "doctor",
        "patient",
        "lab_test_type",
        "user_session",
        "user",
        "organisation",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in reversed(ENUMS):
        enum.drop(bind, checkfirst=True)
