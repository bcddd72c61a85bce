"""Tests for :mod:`clinic.services.payment_service`."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from clinic.db.models import InvoicePaymentStatus, PaymentApplication, PaymentMethod
from clinic.schemas.invoice import InvoiceCreate, InvoiceLineCreate
from clinic.schemas.payment import PaymentCreate, normalize_payment_method
from clinic.services.exceptions import NotFoundError, ValidationError
from clinic.services.invoice_service import InvoiceService
from clinic.services.payment_service import PaymentService, receipt_number

NOW = datetime(2026, 10, 14, 10, 30, tzinfo=timezone.utc)  # a Wednesday


@pytest.fixture()
def invoice(organisation, scoped_client):
    return InvoiceService(scoped_client(organisation.id)).create(
        InvoiceCreate(lines=[InvoiceLineCreate(service_name="Consultation", unit_price=100)])
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("cash", PaymentMethod.CASH),
        ("bank-transfer", PaymentMethod.BANK_TRANSFER),
        ("credit", PaymentMethod.CARD),
        ("debit", PaymentMethod.CARD),
        ("paypal", PaymentMethod.OTHER),
        ("Mobile-Money", PaymentMethod.MOBILE_MONEY),
        ("barter", PaymentMethod.OTHER),
    ],
)
def test_payment_method_aliases(raw: str, expected: PaymentMethod) -> None:
    assert normalize_payment_method(raw) is expected
    assert PaymentCreate(invoice_id=1, amount=1, payment_method=raw).payment_method is expected


def test_receipt_number_uses_epoch_milliseconds() -> None:
    assert receipt_number(NOW) == f"RCPT-{int(NOW.timestamp() * 1000)}"


def test_partial_then_full_payment_updates_status(organisation, invoice, scoped_client) -> None:
    payments = PaymentService(scoped_client(organisation.id))

    first = payments.record(PaymentCreate(invoice_id=invoice.id, amount=40, payment_method="credit"), now=NOW)

    assert first.payment_status is InvoicePaymentStatus.PARTIAL
    assert first.amount_paid == 40
    assert first.balance_due == 60
    assert first.payment.payment_method is PaymentMethod.CARD
    assert first.payment.receipt_number.startswith("RCPT-")

    second = payments.record(PaymentCreate(invoice_id=invoice.id, amount=60), now=NOW)

    assert second.payment_status is InvoicePaymentStatus.PAID
    assert second.balance_due == 0


@pytest.mark.parametrize("amount", [0, -5, 100.01])
def test_invalid_amounts_are_rejected(organisation, invoice, scoped_client, amount: float) -> None:
    with pytest.raises(ValidationError):
        PaymentService(scoped_client(organisation.id)).record(PaymentCreate(invoice_id=invoice.id, amount=amount))


def test_cross_tenant_invoice_is_not_found(organisation, other_organisation, invoice, scoped_client) -> None:
    with pytest.raises(NotFoundError):
        PaymentService(scoped_client(other_organisation.id)).record(PaymentCreate(invoice_id=invoice.id, amount=10))


def test_delete_payment_recomputes_invoice_status(session, organisation, invoice, scoped_client) -> None:
    client = scoped_client(organisation.id)
    payments = PaymentService(client)
    recorded = payments.record(PaymentCreate(invoice_id=invoice.id, amount=100), now=NOW)

    payments.delete(recorded.payment.id)

    detail = InvoiceService(client).get(invoice.id)
    assert detail.payment_status is InvoicePaymentStatus.PENDING
    assert detail.balance_due == 100
    assert session.query(PaymentApplication).count() == 0


def test_this_week_covers_monday_to_sunday(organisation, invoice, scoped_client) -> None:
    payments = PaymentService(scoped_client(organisation.id))
    for day, amount in ((12, 10), (18, 15), (19, 20)):
        payments.record(
            PaymentCreate(
                invoice_id=invoice.id,
                amount=amount,
                payment_date=datetime(2026, 10, day, 9, tzinfo=timezone.utc),
            ),
            now=NOW,
        )

    week = payments.this_week(now=NOW)

    assert week.start == datetime(2026, 10, 12, tzinfo=timezone.utc)
    assert week.total == 25
    assert len(week.payments) == 2


def test_offset_payment_dates_count_in_their_utc_week(organisation, invoice, scoped_client) -> None:
    service = PaymentService(scoped_client(organisation.id))
    # Monday 01:00 in +02:00 is still Sunday of the previous UTC week.
    service.record(
        PaymentCreate(
            invoice_id=invoice.id, amount=10, payment_date=datetime.fromisoformat("2026-10-12T01:00:00+02:00")
        ),
        now=NOW,
    )
    service.record(
        PaymentCreate(
            invoice_id=invoice.id, amount=15, payment_date=datetime.fromisoformat("2026-10-19T00:30:00+02:00")
        ),
        now=NOW,
    )

    week = service.this_week(now=NOW)

    assert week.total == 15
    assert week.payments[0].payment_date == datetime(2026, 10, 18, 22, 30, tzinfo=timezone.utc)
