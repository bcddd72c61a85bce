"""Payment REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from clinic.api.dependencies import get_payment_service
from clinic.api.errors import map_service_error
from clinic.schemas.payment import PaymentCreate, PaymentRead, PaymentRecordResponse, WeeklyPaymentsResponse
from clinic.services.exceptions import ServiceError
from clinic.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("", response_model=PaymentRecordResponse, status_code=status.HTTP_201_CREATED)
def record_payment(
    payload: PaymentCreate,
    service: PaymentService = Depends(get_payment_service),
) -> PaymentRecordResponse:
    """Record a payment against an invoice's remaining balance."""

    try:
        return service.record(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("", response_model=list[PaymentRead])
def list_payments(
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    service: PaymentService = Depends(get_payment_service),
) -> list[PaymentRead]:
    return service.list(offset=offset, limit=limit)


@router.get("/this-week", response_model=WeeklyPaymentsResponse)
def payments_this_week(service: PaymentService = Depends(get_payment_service)) -> WeeklyPaymentsResponse:
    return service.this_week()


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(payment_id: int, service: PaymentService = Depends(get_payment_service)) -> Response:
    try:
        service.delete(payment_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
