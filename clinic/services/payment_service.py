"""Payment recording against invoices."""
from __future__ import annotations

import logging
from datetime import datetime

from clinic.core.scoping import ScopedClient
from clinic.repositories.invoice import InvoiceRepository
from clinic.repositories.payment import PaymentApplicationRepository, PaymentRepository
from clinic.schemas.payment import PaymentCreate, PaymentRead, PaymentRecordResponse, WeeklyPaymentsResponse

from .exceptions import NotFoundError, ValidationError
from .invoice_service import InvoiceService, to_money
from .periods import utc_now, week_bounds

logger = logging.getLogger(__name__)

RECEIPT_PREFIX = "RCPT-"


def receipt_number(moment: datetime) -> str:
    return f"{RECEIPT_PREFIX}{int(moment.timestamp() * 1000)}"


class PaymentService:
    """Records payments and keeps invoice settlement status in sync."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.payments = PaymentRepository(client)
        self.applications = PaymentApplicationRepository(client)
        self.invoices = InvoiceRepository(client)
        self.invoice_service = InvoiceService(client)

    def record(self, payload: PaymentCreate, now: datetime | None = None) -> PaymentRecordResponse:
        invoice = self.invoices.get(payload.invoice_id)
        if invoice is None:
            raise NotFoundError("Invoice")

        amount = to_money(payload.amount)
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        total = to_money(invoice.total_amount)
        paid = self.applications.total_applied(invoice.id)
        remaining = total - paid
        if amount > remaining:
            raise ValidationError(f"Payment amount {amount} exceeds remaining balance {remaining}")

        moment = now or utc_now()
        payment_date = payload.payment_date or moment
        payment = self.payments.create(
            patient_id=invoice.patient_id,
            amount=amount,
            payment_date=payment_date,
            payment_method=payload.payment_method,
            receipt_number=receipt_number(moment),
            notes=payload.notes,
        )
        self.applications.create(
            payment_id=payment.id,
            invoice_id=invoice.id,
            amount_applied=amount,
            applied_date=payment_date,
        )
        status = self.invoice_service.refresh_payment_status(invoice)
        self.session.commit()
        self.session.refresh(payment)
        logger.info(
            "Recorded payment %s of %s on invoice %s (%s)", payment.receipt_number, amount, invoice.id, status.value
        )
        paid += amount
        return PaymentRecordResponse(
            payment=PaymentRead.model_validate(payment),
            invoice_id=invoice.id,
            payment_status=status,
            amount_paid=float(paid),
            balance_due=float(total - paid),
        )

    def list(self, offset: int = 0, limit: int = 100) -> list[PaymentRead]:
        return [PaymentRead.model_validate(row) for row in self.payments.list(offset=offset, limit=limit)]

    def delete(self, payment_id: int) -> None:
        payment = self.payments.get(payment_id)
        if payment is None:
            raise NotFoundError("Payment")
        invoice_ids = {application.invoice_id for application in self.applications.list_for_payment(payment.id)}
        self.applications.delete_for_payment(payment.id)
        self.payments.delete(payment.id)
        for invoice_id in sorted(invoice_ids):
            invoice = self.invoices.get(invoice_id)
            if invoice is not None:
                self.invoice_service.refresh_payment_status(invoice)
        self.session.commit()
        logger.info("Deleted payment %s", payment_id)

    def this_week(self, now: datetime | None = None) -> WeeklyPaymentsResponse:
        start, end = week_bounds(now or utc_now())
        rows = self.payments.list_between(start, end)
        return WeeklyPaymentsResponse(
            start=start,
            end=end,
            payments=[PaymentRead.model_validate(row) for row in rows],
            total=float(self.payments.total(self.payments.period_filter(start, end))),
        )
