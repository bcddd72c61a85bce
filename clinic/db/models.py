"""ORM model definitions for the clinic practice domain."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    JSON,
    Date,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UTCDateTime

DELETE_CASCADE = "all, delete-orphan"
ORGANISATION_FK = "organisation.id"
PATIENT_FK = "patient.id"
DOCTOR_FK = "doctor.id"

MONEY = Numeric(12, 2)


class TenantScopedModel(str, Enum):
    """Closed set of entity types isolated per organisation."""

    PATIENT = "patient"
    DOCTOR = "doctor"
    PATIENT_APPOINTMENT = "patient_appointment"
    PRESCRIPTION = "prescription"
    SERVICE = "service"
    INVOICE = "invoice"
    INVOICE_LINE = "invoice_line"
    PAYMENT = "payment"
    PAYMENT_APPLICATION = "payment_application"
    LAB_TEST_ORDER = "lab_test_order"
    PATIENT_VISIT = "patient_visit"
    RADIOLOGY_ORDER = "radiology_order"


class UserRole(str, Enum):
    """Roles granted by the identity provider."""

    ADMIN = "ADMIN"
    CABINET_MANAGER = "CABINET_MANAGER"
    DOCTOR = "DOCTOR"
    SECRETARY = "SECRETARY"


class DoctorStatus(str, Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"


class AppointmentStatus(str, Enum):
    """Lifecycle state for appointments."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class InvoicePaymentStatus(str, Enum):
    """Settlement state derived from applied payments."""

    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    INSURANCE = "insurance"
    MOBILE_MONEY = "mobile_money"
    OTHER = "other"


class LabOrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class VisitStatus(str, Enum):
    """Progress of a consultation: scheduled, then in progress, then closed."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RadiologyOrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Organisation(Base, TimestampMixin):
    """Organisation is the isolation boundary for clinic data."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    users: Mapped[list["User"]] = relationship("User", back_populates="organisation")


class User(Base, TimestampMixin):
    """Staff account known to the identity provider."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organisation_id: Mapped[int | None] = mapped_column(
        ForeignKey(ORGANISATION_FK, ondelete="set null"), nullable=True, index=True
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[UserRole | None] = mapped_column(SQLEnum(UserRole, name="user_role"), nullable=True)

    organisation: Mapped[Organisation | None] = relationship("Organisation", back_populates="users")
    sessions: Mapped[list["UserSession"]] = relationship(
        "UserSession", back_populates="user", cascade=DELETE_CASCADE
    )


class UserSession(Base, TimestampMixin):
    """Session token issued by the identity provider integration."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("user.id", ondelete="cascade"), nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    user: Mapped[User] = relationship("User", back_populates="sessions")


class OrganisationScopedMixin(TimestampMixin):
    """Mixin for entities owned by exactly one organisation."""

    organisation_id: Mapped[int] = mapped_column(
        ForeignKey(ORGANISATION_FK, ondelete="cascade"), nullable=False, index=True
    )


class Patient(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.PATIENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (Index("ix_patient_name", "organisation_id", "name"),)


class Doctor(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.DOCTOR

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    specialty: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[DoctorStatus] = mapped_column(
        SQLEnum(DoctorStatus, name="doctor_status"), default=DoctorStatus.ENABLED, nullable=False
    )


class PatientAppointment(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.PATIENT_APPOINTMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey(PATIENT_FK, ondelete="cascade"), nullable=False)
    doctor_id: Mapped[int | None] = mapped_column(ForeignKey(DOCTOR_FK, ondelete="set null"), nullable=True)
    appointment_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    appointment_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[AppointmentStatus] = mapped_column(
        SQLEnum(AppointmentStatus, name="appointment_status"),
        default=AppointmentStatus.SCHEDULED,
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    patient: Mapped[Patient] = relationship("Patient")
    doctor: Mapped[Doctor | None] = relationship("Doctor")

    __table_args__ = (Index("ix_appointment_date", "organisation_id", "appointment_date"),)


class Prescription(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.PRESCRIPTION

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey(PATIENT_FK, ondelete="cascade"), nullable=False)
    doctor_id: Mapped[int | None] = mapped_column(ForeignKey(DOCTOR_FK, ondelete="set null"), nullable=True)
    issued_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    items: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)


class Service(OrganisationScopedMixin, Base):
    """Billable medical service from the organisation's catalogue."""

    __tenant_scope__ = TenantScopedModel.SERVICE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)

    __table_args__ = (UniqueConstraint("organisation_id", "code", name="uq_service_code_per_organisation"),)


class Invoice(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.INVOICE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int | None] = mapped_column(ForeignKey(PATIENT_FK, ondelete="set null"), nullable=True)
    invoice_number: Mapped[str] = mapped_column(String(32), nullable=False)
    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_status: Mapped[InvoicePaymentStatus] = mapped_column(
        SQLEnum(InvoicePaymentStatus, name="invoice_payment_status"),
        default=InvoicePaymentStatus.PENDING,
        nullable=False,
    )
    total_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    __table_args__ = (
        UniqueConstraint("organisation_id", "invoice_number", name="uq_invoice_number_per_organisation"),
        Index("ix_invoice_payment_status", "organisation_id", "payment_status"),
    )


class InvoiceLine(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.INVOICE_LINE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoice.id", ondelete="cascade"), nullable=False, index=True)
    service_id: Mapped[int | None] = mapped_column(ForeignKey("service.id", ondelete="set null"), nullable=True)
    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    service_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    line_total: Mapped[Decimal] = mapped_column(MONEY, nullable=False)


class Payment(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.PAYMENT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int | None] = mapped_column(ForeignKey(PATIENT_FK, ondelete="set null"), nullable=True)
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    payment_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        SQLEnum(PaymentMethod, name="payment_method"), default=PaymentMethod.CASH, nullable=False
    )
    receipt_number: Mapped[str] = mapped_column(String(64), nullable=False)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (Index("ix_payment_date", "organisation_id", "payment_date"),)


class PaymentApplication(OrganisationScopedMixin, Base):
    """Portion of a payment applied to an invoice."""

    __tenant_scope__ = TenantScopedModel.PAYMENT_APPLICATION

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payment_id: Mapped[int] = mapped_column(ForeignKey("payment.id", ondelete="cascade"), nullable=False, index=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("invoice.id", ondelete="cascade"), nullable=False, index=True)
    invoice_line_id: Mapped[int | None] = mapped_column(
        ForeignKey("invoice_line.id", ondelete="set null"), nullable=True
    )
    amount_applied: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    applied_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)


class LabTestType(Base, TimestampMixin):
    """Global catalogue of lab tests shared by every organisation."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True)
    default_unit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    default_reference_range: Mapped[str | None] = mapped_column(String(64), nullable=True)


class LabTestOrder(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.LAB_TEST_ORDER

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey(PATIENT_FK, ondelete="cascade"), nullable=False, index=True)
    doctor_id: Mapped[int | None] = mapped_column(ForeignKey(DOCTOR_FK, ondelete="set null"), nullable=True)
    test_type_id: Mapped[int] = mapped_column(ForeignKey("lab_test_type.id"), nullable=False)
    ordered_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    status: Mapped[LabOrderStatus] = mapped_column(
        SQLEnum(LabOrderStatus, name="lab_order_status"), default=LabOrderStatus.PENDING, nullable=False
    )
    result_value: Mapped[str | None] = mapped_column(String(64), nullable=True)
    result_unit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    reference_range: Mapped[str | None] = mapped_column(String(64), nullable=True)
    result_flag: Mapped[str | None] = mapped_column(String(16), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    test_type: Mapped[LabTestType] = relationship("LabTestType", lazy="joined")


class PatientVisit(OrganisationScopedMixin, Base):
    """A consultation, optionally opened from a booked appointment."""

    __tenant_scope__ = TenantScopedModel.PATIENT_VISIT

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey(PATIENT_FK, ondelete="cascade"), nullable=False, index=True)
    doctor_id: Mapped[int | None] = mapped_column(ForeignKey(DOCTOR_FK, ondelete="set null"), nullable=True)
    appointment_id: Mapped[int | None] = mapped_column(
        ForeignKey("patient_appointment.id", ondelete="set null"), nullable=True, unique=True
    )
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    status: Mapped[VisitStatus] = mapped_column(
        SQLEnum(VisitStatus, name="visit_status"), default=VisitStatus.SCHEDULED, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    __table_args__ = (Index("ix_visit_date", "organisation_id", "visit_date"),)


class RadiologyExamType(Base, TimestampMixin):
    """Global catalogue of imaging exams shared by every organisation."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True)


class RadiologyOrder(OrganisationScopedMixin, Base):
    __tenant_scope__ = TenantScopedModel.RADIOLOGY_ORDER

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    patient_id: Mapped[int] = mapped_column(ForeignKey(PATIENT_FK, ondelete="cascade"), nullable=False, index=True)
    visit_id: Mapped[int | None] = mapped_column(
        ForeignKey("patient_visit.id", ondelete="cascade"), nullable=True, index=True
    )
    doctor_id: Mapped[int | None] = mapped_column(ForeignKey(DOCTOR_FK, ondelete="set null"), nullable=True)
    exam_type_id: Mapped[int] = mapped_column(ForeignKey("radiology_exam_type.id"), nullable=False)
    ordered_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    status: Mapped[RadiologyOrderStatus] = mapped_column(
        SQLEnum(RadiologyOrderStatus, name="radiology_order_status"),
        default=RadiologyOrderStatus.PENDING,
        nullable=False,
    )
    result: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    result_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    exam_type: Mapped[RadiologyExamType] = relationship("RadiologyExamType", lazy="joined")


def tenant_scoped_models() -> dict[TenantScopedModel, type[Base]]:
    """Map each scoped tag to the one model declaring it."""

    registry: dict[TenantScopedModel, type[Base]] = {}
    for mapper in Base.registry.mappers:
        tag = getattr(mapper.class_, "__tenant_scope__", None)
        if tag is None:
            continue
        if tag in registry:
            raise RuntimeError(f"Tenant scope {tag.value!r} declared by more than one model")
        registry[tag] = mapper.class_
    return registry


__all__ = [
    "TenantScopedModel",
    "UserRole",
    "DoctorStatus",
    "AppointmentStatus",
    "InvoicePaymentStatus",
    "PaymentMethod",
    "LabOrderStatus",
    "VisitStatus",
    "RadiologyOrderStatus",
    "Organisation",
    "User",
    "UserSession",
    "OrganisationScopedMixin",
    "Patient",
    "Doctor",
    "PatientAppointment",
    "Prescription",
    "Service",
    "Invoice",
    "InvoiceLine",
    "Payment",
    "PaymentApplication",
    "LabTestType",
    "LabTestOrder",
    "PatientVisit",
    "RadiologyExamType",
    "RadiologyOrder",
    "tenant_scoped_models",
]
