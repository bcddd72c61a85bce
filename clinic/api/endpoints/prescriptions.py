"""Prescription REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from clinic.api.dependencies import get_prescription_service
from clinic.api.errors import map_service_error
from clinic.schemas.prescription import PrescriptionCreate, PrescriptionRead
from clinic.services.exceptions import ServiceError
from clinic.services.prescription_service import PrescriptionService

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])


@router.post("", response_model=PrescriptionRead, status_code=status.HTTP_201_CREATED)
def create_prescription(
    payload: PrescriptionCreate,
    service: PrescriptionService = Depends(get_prescription_service),
) -> PrescriptionRead:
    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("/{prescription_id}", response_model=PrescriptionRead)
def get_prescription(
    prescription_id: int,
    service: PrescriptionService = Depends(get_prescription_service),
) -> PrescriptionRead:
    try:
        return service.get(prescription_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
