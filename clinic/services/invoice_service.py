"""Invoice service exposing tenant-scoped operations."""
from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from clinic.core.scoping import ScopedClient
from clinic.db.models import Invoice, InvoiceLine, InvoicePaymentStatus, PaymentApplication
from clinic.repositories.catalog import ServiceRepository
from clinic.repositories.invoice import InvoiceLineRepository, InvoiceRepository
from clinic.repositories.patient import PatientRepository
from clinic.repositories.payment import PaymentApplicationRepository
from clinic.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceFilterParams,
    InvoiceLineCreate,
    InvoiceLineRead,
    InvoiceListResponse,
    InvoiceRead,
    InvoiceUpdate,
)

from .exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_payment_status(total: Decimal, paid: Decimal) -> InvoicePaymentStatus:
    """Derive the settlement state of an invoice from what has been applied to it."""

    if paid >= total:
        return InvoicePaymentStatus.PAID
    if paid > 0:
        return InvoicePaymentStatus.PARTIAL
    return InvoicePaymentStatus.PENDING


class InvoiceService:
    """Tenant-scoped invoice operations."""

    def __init__(self, client: ScopedClient) -> None:
        self.client = client
        self.session = client.session
        self.invoices = InvoiceRepository(client)
        self.lines = InvoiceLineRepository(client)
        self.applications = PaymentApplicationRepository(client)
        self.services = ServiceRepository(client)
        self.patients = PatientRepository(client)

    def _require(self, invoice_id: int) -> Invoice:
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice")
        return invoice

    def _line_payloads(self, lines: Sequence[InvoiceLineCreate]) -> list[dict[str, Any]]:
        payloads: list[dict[str, Any]] = []
        for line in lines:
            name, code, price = line.service_name, line.service_code, line.unit_price
            if line.service_id is not None:
                service = self.services.get(line.service_id)
                if service is None:
                    raise ValidationError(f"Service {line.service_id} does not exist")
                name = name or service.name
                code = code or service.code
                price = service.amount if price is None else price
            if not name:
                raise ValidationError("Invoice lines need a service or a service name")
            if price is None:
                raise ValidationError(f"Invoice line {name!r} has no unit price")
            unit_price = to_money(price)
            payloads.append(
                {
                    "service_id": line.service_id,
                    "service_name": name,
                    "service_code": code,
                    "description": line.description,
                    "quantity": line.quantity,
                    "unit_price": unit_price,
                    "line_total": to_money(unit_price * line.quantity),
                }
            )
        return payloads

    def _write_lines(self, invoice: Invoice, lines: Sequence[InvoiceLineCreate]) -> Decimal:
        payloads = self._line_payloads(lines)
        for payload in payloads:
            payload["invoice_id"] = invoice.id
        self.client.create_many(InvoiceLine, payloads)
        return sum((payload["line_total"] for payload in payloads), Decimal("0"))

    def refresh_payment_status(self, invoice: Invoice) -> InvoicePaymentStatus:
        paid = self.applications.total_applied(invoice.id)
        status = compute_payment_status(to_money(invoice.total_amount), paid)
        if status is not invoice.payment_status:
            self.invoices.update(invoice.id, payment_status=status)
        return status

    def create(self, payload: InvoiceCreate) -> InvoiceDetail:
        if payload.patient_id is not None and self.patients.get(payload.patient_id) is None:
            raise ValidationError(f"Patient {payload.patient_id} does not exist")
        invoice_number = payload.invoice_number or self.invoices.next_invoice_number()
        if payload.invoice_number and self.invoices.first({"invoice_number": invoice_number}) is not None:
            raise ConflictError(f"Invoice number {invoice_number} already exists")

        line_payloads = self._line_payloads(payload.lines)
        invoice = self.invoices.create(
            patient_id=payload.patient_id,
            invoice_number=invoice_number,
            invoice_date=payload.invoice_date or date.today(),
            due_date=payload.due_date,
            notes=payload.notes,
            payment_status=InvoicePaymentStatus.PENDING,
            total_amount=sum((line["line_total"] for line in line_payloads), Decimal("0")),
        )
        self.client.create_many(InvoiceLine, [{**line, "invoice_id": invoice.id} for line in line_payloads])
        self.session.commit()
        self.session.refresh(invoice)
        logger.info("Created invoice %s (%s)", invoice.id, invoice.invoice_number)
        return self._detail(invoice)

    def list(
        self,
        filters: InvoiceFilterParams,
        offset: int = 0,
        limit: int = 100,
    ) -> InvoiceListResponse:
        where = self.invoices.build_filter(payment_status=filters.payment_status, patient_id=filters.patient_id)
        rows = self.invoices.list(where, offset=offset, limit=limit)
        return InvoiceListResponse(
            items=[InvoiceRead.model_validate(row) for row in rows],
            total=self.invoices.count(where),
        )

    def get(self, invoice_id: int) -> InvoiceDetail:
        return self._detail(self._require(invoice_id))

    def update(self, invoice_id: int, payload: InvoiceUpdate) -> InvoiceDetail:
        invoice = self._require(invoice_id)
        changes = payload.model_dump(exclude_unset=True, exclude={"lines"})
        if payload.lines is not None:
            self.client.update(PaymentApplication, {"invoice_id": invoice.id}, {"invoice_line_id": None})
            self.lines.delete_for_invoice(invoice.id)
            changes["total_amount"] = self._write_lines(invoice, payload.lines)
        if changes:
            self.invoices.update(invoice.id, **changes)
        self.refresh_payment_status(invoice)
        self.session.commit()
        self.session.refresh(invoice)
        return self._detail(invoice)

    def delete(self, invoice_id: int) -> None:
        invoice = self._require(invoice_id)
        self.applications.delete_for_invoice(invoice.id)
        self.lines.delete_for_invoice(invoice.id)
        self.invoices.delete(invoice.id)
        self.session.commit()
        logger.info("Deleted invoice %s (%s)", invoice_id, invoice.invoice_number)

    def _detail(self, invoice: Invoice) -> InvoiceDetail:
        paid = self.applications.total_applied(invoice.id)
        total = to_money(invoice.total_amount)
        base = InvoiceRead.model_validate(invoice)
        return InvoiceDetail(
            **base.model_dump(),
            lines=[InvoiceLineRead.model_validate(line) for line in self.lines.list_for_invoice(invoice.id)],
            amount_paid=float(paid),
            balance_due=float(max(total - paid, Decimal("0"))),
        )
