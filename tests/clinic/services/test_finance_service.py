"""Tests for :mod:`clinic.services.finance_service` and period helpers."""
from __future__ import annotations

from datetime import datetime, timezone

from clinic.schemas.invoice import InvoiceCreate, InvoiceLineCreate
from clinic.schemas.payment import PaymentCreate
from clinic.services.finance_service import FinanceService
from clinic.services.invoice_service import InvoiceService
from clinic.services.payment_service import PaymentService
from clinic.services.periods import day_bounds, month_bounds, week_bounds


def test_period_bounds() -> None:
    sunday = datetime(2026, 10, 18, 23, 0, tzinfo=timezone.utc)

    assert week_bounds(sunday)[0] == datetime(2026, 10, 12, tzinfo=timezone.utc)
    assert day_bounds(sunday)[1].hour == 23
    assert month_bounds(2026, 12)[1] == datetime(2026, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)


def test_dashboard_aggregates(organisation, other_organisation, scoped_client) -> None:
    client = scoped_client(organisation.id)
    invoices = InvoiceService(client)
    payments = PaymentService(client)
    first = invoices.create(InvoiceCreate(lines=[InvoiceLineCreate(service_name="A", unit_price=100)]))
    second = invoices.create(InvoiceCreate(lines=[InvoiceLineCreate(service_name="B", unit_price=50)]))
    invoices.create(InvoiceCreate(lines=[InvoiceLineCreate(service_name="C", unit_price=25)]))
    payments.record(
        PaymentCreate(invoice_id=first.id, amount=100, payment_date=datetime(2026, 3, 10, tzinfo=timezone.utc))
    )
    payments.record(
        PaymentCreate(invoice_id=second.id, amount=20, payment_date=datetime(2026, 5, 2, tzinfo=timezone.utc))
    )
    InvoiceService(scoped_client(other_organisation.id)).create(
        InvoiceCreate(lines=[InvoiceLineCreate(service_name="Z", unit_price=999)])
    )

    finance = FinanceService(client)

    breakdown = finance.status_breakdown()
    assert (breakdown.paid, breakdown.partial, breakdown.pending) == (1, 1, 1)

    totals = finance.totals()
    assert (totals.invoiced, totals.collected, totals.outstanding) == (175, 120, 55)

    revenue = finance.monthly_revenue(2026)
    assert len(revenue.months) == 12
    assert revenue.months[2].amount == 100
    assert revenue.months[4].amount == 20
    assert sum(month.amount for month in revenue.months) == 120
