"""Pydantic schemas for finance dashboards."""
from __future__ import annotations

from pydantic import BaseModel, Field


class InvoiceStatusBreakdown(BaseModel):
    paid: int
    partial: int
    pending: int


class FinanceTotals(BaseModel):
    invoiced: float
    collected: float
    outstanding: float


class MonthlyRevenue(BaseModel):
    month: int = Field(..., ge=1, le=12)
    amount: float


class MonthlyRevenueResponse(BaseModel):
    year: int
    months: list[MonthlyRevenue]
