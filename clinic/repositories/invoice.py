"""Invoice repositories handling tenant-scoped queries."""
from __future__ import annotations

from clinic.core.scoping import Filter
from clinic.db.models import Invoice, InvoiceLine, InvoicePaymentStatus

from .base import TenantScopedRepository

INVOICE_NUMBER_PREFIX = "INV-"


class InvoiceRepository(TenantScopedRepository[Invoice]):
    """Invoice repository with filtering helpers."""

    model = Invoice
    default_order = (Invoice.created_at.desc(), Invoice.id.desc())

    def build_filter(
        self,
        payment_status: InvoicePaymentStatus | None = None,
        patient_id: int | None = None,
    ) -> Filter:
        scoped = Filter()
        if payment_status is not None:
            scoped = scoped.and_(payment_status=payment_status)
        if patient_id is not None:
            scoped = scoped.and_(patient_id=patient_id)
        return scoped

    def next_invoice_number(self) -> str:
        sequence = self.count() + 1
        candidate = f"{INVOICE_NUMBER_PREFIX}{sequence:05d}"
        while self.first({"invoice_number": candidate}) is not None:
            sequence += 1
            candidate = f"{INVOICE_NUMBER_PREFIX}{sequence:05d}"
        return candidate

    def status_counts(self) -> dict[InvoicePaymentStatus, int]:
        return {status: self.count({"payment_status": status}) for status in InvoicePaymentStatus}


class InvoiceLineRepository(TenantScopedRepository[InvoiceLine]):
    model = InvoiceLine
    default_order = (InvoiceLine.id,)

    def list_for_invoice(self, invoice_id: int) -> list[InvoiceLine]:
        return self.list({"invoice_id": invoice_id}, limit=None)

    def delete_for_invoice(self, invoice_id: int) -> int:
        return self.client.delete(self.model, {"invoice_id": invoice_id})
