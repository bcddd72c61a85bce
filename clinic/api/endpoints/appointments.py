"""Appointment REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from clinic.api.dependencies import get_appointment_filters, get_appointment_service
from clinic.api.errors import map_service_error
from clinic.schemas.appointment import (
    AppointmentCreate,
    AppointmentFilterParams,
    AppointmentListResponse,
    AppointmentRead,
)
from clinic.services.appointment_service import AppointmentService
from clinic.services.exceptions import ServiceError

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentRead:
    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("", response_model=AppointmentListResponse)
def list_appointments(
    filters: AppointmentFilterParams = Depends(get_appointment_filters),
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentListResponse:
    """List appointments, optionally for today or the current week."""

    return service.list(filters)


@router.get("/{appointment_id}", response_model=AppointmentRead)
def get_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentRead:
    try:
        return service.get(appointment_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("/{appointment_id}/cancel", response_model=AppointmentRead)
def cancel_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentRead:
    try:
        return service.cancel(appointment_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
