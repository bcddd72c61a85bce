"""Finance dashboard aggregates."""
from __future__ import annotations

from clinic.core.scoping import ScopedClient
from clinic.db.models import Invoice, InvoicePaymentStatus, PaymentApplication
from clinic.repositories.invoice import InvoiceRepository
from clinic.repositories.payment import PaymentRepository
from clinic.schemas.finance import FinanceTotals, InvoiceStatusBreakdown, MonthlyRevenue, MonthlyRevenueResponse

from .periods import month_bounds


class FinanceService:
    def __init__(self, client: ScopedClient) -> None:
        self.client = client
        self.invoices = InvoiceRepository(client)
        self.payments = PaymentRepository(client)

    def status_breakdown(self) -> InvoiceStatusBreakdown:
        counts = self.invoices.status_counts()
        return InvoiceStatusBreakdown(
            paid=counts[InvoicePaymentStatus.PAID],
            partial=counts[InvoicePaymentStatus.PARTIAL],
            pending=counts[InvoicePaymentStatus.PENDING],
        )

    def totals(self) -> FinanceTotals:
        invoiced = self.client.sum(Invoice, "total_amount")
        applied = self.client.sum(PaymentApplication, "amount_applied")
        return FinanceTotals(
            invoiced=float(invoiced),
            collected=float(self.payments.total()),
            outstanding=float(invoiced - applied),
        )

    def monthly_revenue(self, year: int) -> MonthlyRevenueResponse:
        months = []
        for month in range(1, 13):
            start, end = month_bounds(year, month)
            amount = self.payments.total(self.payments.period_filter(start, end))
            months.append(MonthlyRevenue(month=month, amount=float(amount)))
        return MonthlyRevenueResponse(year=year, months=months)
