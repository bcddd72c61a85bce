"""Repositories for payments and their invoice applications."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from clinic.core.scoping import Filter
from clinic.db.models import Payment, PaymentApplication

from .base import TenantScopedRepository


class PaymentRepository(TenantScopedRepository[Payment]):
    model = Payment
    default_order = (Payment.payment_date.desc(), Payment.id.desc())

    def period_filter(self, start: datetime, end: datetime) -> Filter:
        return Filter().and_(self.model.payment_date >= start, self.model.payment_date <= end)

    def list_between(self, start: datetime, end: datetime) -> list[Payment]:
        return self.list(self.period_filter(start, end), limit=None)

    def total(self, where: Filter | None = None) -> Decimal:
        return self.client.sum(self.model, "amount", where)


class PaymentApplicationRepository(TenantScopedRepository[PaymentApplication]):
    model = PaymentApplication
    default_order = (PaymentApplication.applied_date, PaymentApplication.id)

    def list_for_invoice(self, invoice_id: int) -> list[PaymentApplication]:
        return self.list({"invoice_id": invoice_id}, limit=None)

    def list_for_payment(self, payment_id: int) -> list[PaymentApplication]:
        return self.list({"payment_id": payment_id}, limit=None)

    def total_applied(self, invoice_id: int) -> Decimal:
        return self.client.sum(self.model, "amount_applied", {"invoice_id": invoice_id})

    def delete_for_invoice(self, invoice_id: int) -> int:
        return self.client.delete(self.model, {"invoice_id": invoice_id})

    def delete_for_payment(self, payment_id: int) -> int:
        return self.client.delete(self.model, {"payment_id": payment_id})
