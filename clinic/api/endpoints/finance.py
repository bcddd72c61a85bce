"""Finance dashboard REST endpoints."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from clinic.api.dependencies import get_finance_service
from clinic.schemas.finance import FinanceTotals, InvoiceStatusBreakdown, MonthlyRevenueResponse
from clinic.services.finance_service import FinanceService

router = APIRouter(prefix="/finance", tags=["finance"])


@router.get("/invoice-status", response_model=InvoiceStatusBreakdown)
def invoice_status_breakdown(service: FinanceService = Depends(get_finance_service)) -> InvoiceStatusBreakdown:
    return service.status_breakdown()


@router.get("/totals", response_model=FinanceTotals)
def finance_totals(service: FinanceService = Depends(get_finance_service)) -> FinanceTotals:
    return service.totals()


@router.get("/monthly-revenue", response_model=MonthlyRevenueResponse)
def monthly_revenue(
    year: int | None = Query(default=None, ge=1900, le=2999),
    service: FinanceService = Depends(get_finance_service),
) -> MonthlyRevenueResponse:
    """Return twelve monthly payment totals for ``year`` (defaults to the current year)."""

    return service.monthly_revenue(year or date.today().year)
