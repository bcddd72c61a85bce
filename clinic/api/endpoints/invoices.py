"""Invoice REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from clinic.api.dependencies import get_invoice_filters, get_invoice_service
from clinic.api.errors import map_service_error
from clinic.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceFilterParams,
    InvoiceListResponse,
    InvoiceUpdate,
)
from clinic.services.exceptions import ServiceError
from clinic.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceDetail, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreate,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceDetail:
    """Create an invoice with its lines."""

    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("", response_model=InvoiceListResponse)
def list_invoices(
    filters: InvoiceFilterParams = Depends(get_invoice_filters),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceListResponse:
    """List invoices with optional filters."""

    return service.list(filters, offset=offset, limit=limit)


@router.get("/{invoice_id}", response_model=InvoiceDetail)
def get_invoice(invoice_id: int, service: InvoiceService = Depends(get_invoice_service)) -> InvoiceDetail:
    try:
        return service.get(invoice_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.patch("/{invoice_id}", response_model=InvoiceDetail)
def update_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceDetail:
    try:
        return service.update(invoice_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(
    invoice_id: int,
    service: InvoiceService = Depends(get_invoice_service),
) -> Response:
    """Delete an invoice together with its lines and payment applications."""

    try:
        service.delete(invoice_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
