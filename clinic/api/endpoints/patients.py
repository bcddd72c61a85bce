"""Patient REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from clinic.api.dependencies import (
    get_lab_service,
    get_patient_service,
    get_prescription_service,
    get_radiology_service,
)
from clinic.api.errors import map_service_error
from clinic.schemas.lab import PatientLabOrdersResponse
from clinic.schemas.patient import PatientCreate, PatientListResponse, PatientRead, PatientUpdate
from clinic.schemas.prescription import PrescriptionRead
from clinic.schemas.radiology import PatientRadiologyOrdersResponse
from clinic.services.exceptions import ServiceError
from clinic.services.lab_service import LabService
from clinic.services.patient_service import PatientService
from clinic.services.prescription_service import PrescriptionService
from clinic.services.radiology_service import RadiologyService

router = APIRouter(prefix="/patients", tags=["patients"])


@router.post("", response_model=PatientRead, status_code=status.HTTP_201_CREATED)
def create_patient(
    payload: PatientCreate,
    service: PatientService = Depends(get_patient_service),
) -> PatientRead:
    """Register a patient in the caller's organisation."""

    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("", response_model=PatientListResponse)
def list_patients(
    search: str | None = Query(default=None, max_length=255),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    service: PatientService = Depends(get_patient_service),
) -> PatientListResponse:
    """List patients matching an optional name, email or phone search."""

    return service.list(search, offset=offset, limit=limit)


@router.get("/{patient_id}", response_model=PatientRead)
def get_patient(patient_id: int, service: PatientService = Depends(get_patient_service)) -> PatientRead:
    try:
        return service.get(patient_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.patch("/{patient_id}", response_model=PatientRead)
def update_patient(
    patient_id: int,
    payload: PatientUpdate,
    service: PatientService = Depends(get_patient_service),
) -> PatientRead:
    try:
        return service.update(patient_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(patient_id: int, service: PatientService = Depends(get_patient_service)) -> Response:
    try:
        service.delete(patient_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{patient_id}/prescriptions", response_model=list[PrescriptionRead])
def list_patient_prescriptions(
    patient_id: int,
    service: PrescriptionService = Depends(get_prescription_service),
) -> list[PrescriptionRead]:
    try:
        return service.list_for_patient(patient_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("/{patient_id}/lab-orders", response_model=PatientLabOrdersResponse)
def list_patient_lab_orders(
    patient_id: int,
    service: LabService = Depends(get_lab_service),
) -> PatientLabOrdersResponse:
    """Return the patient's lab orders grouped by test category."""

    try:
        return service.patient_orders(patient_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("/{patient_id}/radiology-orders", response_model=PatientRadiologyOrdersResponse)
def list_patient_radiology_orders(
    patient_id: int,
    service: RadiologyService = Depends(get_radiology_service),
) -> PatientRadiologyOrdersResponse:
    try:
        return service.patient_orders(patient_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
