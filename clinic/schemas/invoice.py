"""Pydantic schemas for invoice endpoints."""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from clinic.db.models import InvoicePaymentStatus


class InvoiceLineCreate(BaseModel):
    """Invoice line; catalogue lines inherit missing name, code and price."""

    service_id: int | None = Field(default=None, ge=1)
    service_name: str | None = Field(default=None, max_length=255)
    service_code: str | None = Field(default=None, max_length=32)
    description: str | None = Field(default=None, max_length=500)
    quantity: PositiveInt = 1
    unit_price: float | None = Field(default=None, ge=0)


class InvoiceCreate(BaseModel):
    """Payload for creating invoices."""

    patient_id: int | None = Field(default=None, ge=1)
    invoice_number: str | None = Field(default=None, max_length=32)
    invoice_date: date | None = None
    due_date: date | None = None
    notes: str | None = Field(default=None, max_length=1000)
    lines: list[InvoiceLineCreate] = Field(..., min_length=1)


class InvoiceUpdate(BaseModel):
    """Update notes or due date, or replace every line."""

    due_date: date | None = None
    notes: str | None = Field(default=None, max_length=1000)
    lines: list[InvoiceLineCreate] | None = Field(default=None, min_length=1)


class InvoiceLineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_id: int | None
    service_name: str
    service_code: str | None
    description: str | None
    quantity: int
    unit_price: float
    line_total: float


class InvoiceRead(BaseModel):
    """Invoice representation returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int | None
    invoice_number: str
    invoice_date: date
    due_date: date | None
    payment_status: InvoicePaymentStatus
    total_amount: float
    notes: str | None
    created_at: datetime


class InvoiceDetail(InvoiceRead):
    lines: list[InvoiceLineRead]
    amount_paid: float
    balance_due: float


class InvoiceFilterParams(BaseModel):
    """Query parameters for invoice listing."""

    payment_status: InvoicePaymentStatus | None = None
    patient_id: int | None = Field(default=None, ge=1)


class InvoiceListResponse(BaseModel):
    """Paginated invoice list."""

    items: list[InvoiceRead]
    total: int
