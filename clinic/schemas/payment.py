"""Pydantic schemas for payments."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clinic.db.models import InvoicePaymentStatus, PaymentMethod

PAYMENT_METHOD_ALIASES: dict[str, PaymentMethod] = {
    "cash": PaymentMethod.CASH,
    "card": PaymentMethod.CARD,
    "credit": PaymentMethod.CARD,
    "debit": PaymentMethod.CARD,
    "bank-transfer": PaymentMethod.BANK_TRANSFER,
    "bank_transfer": PaymentMethod.BANK_TRANSFER,
    "cheque": PaymentMethod.CHEQUE,
    "insurance": PaymentMethod.INSURANCE,
    "mobile-money": PaymentMethod.MOBILE_MONEY,
    "mobile_money": PaymentMethod.MOBILE_MONEY,
    "paypal": PaymentMethod.OTHER,
    "other": PaymentMethod.OTHER,
}


def normalize_payment_method(value: Any) -> PaymentMethod:
    """Map a free-form method label onto :class:`PaymentMethod`; unknown labels become ``other``."""

    if isinstance(value, PaymentMethod):
        return value
    if value is None:
        return PaymentMethod.CASH
    return PAYMENT_METHOD_ALIASES.get(str(value).strip().lower(), PaymentMethod.OTHER)


class PaymentCreate(BaseModel):
    """Payload for recording a payment against one invoice."""

    invoice_id: int = Field(..., ge=1)
    amount: float
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_date: datetime | None = None
    notes: str | None = Field(default=None, max_length=500)

    @field_validator("payment_method", mode="before")
    @classmethod
    def map_method_alias(cls, value: Any) -> PaymentMethod:
        return normalize_payment_method(value)


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int | None
    amount: float
    payment_date: datetime
    payment_method: PaymentMethod
    receipt_number: str
    notes: str | None


class PaymentRecordResponse(BaseModel):
    payment: PaymentRead
    invoice_id: int
    payment_status: InvoicePaymentStatus
    amount_paid: float
    balance_due: float


class WeeklyPaymentsResponse(BaseModel):
    """Payments received between Monday and Sunday of the current week."""

    start: datetime
    end: datetime
    payments: list[PaymentRead]
    total: float
