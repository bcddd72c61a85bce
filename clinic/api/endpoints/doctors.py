"""Doctor REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from clinic.api.dependencies import get_doctor_service
from clinic.api.errors import map_service_error
from clinic.db.models import DoctorStatus
from clinic.schemas.doctor import DoctorCreate, DoctorRead, DoctorUpdate
from clinic.services.doctor_service import DoctorService
from clinic.services.exceptions import ServiceError

router = APIRouter(prefix="/doctors", tags=["doctors"])


@router.post("", response_model=DoctorRead, status_code=status.HTTP_201_CREATED)
def create_doctor(payload: DoctorCreate, service: DoctorService = Depends(get_doctor_service)) -> DoctorRead:
    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("", response_model=list[DoctorRead])
def list_doctors(
    status_filter: DoctorStatus | None = Query(default=None, alias="status"),
    include_disabled: bool = Query(default=False),
    service: DoctorService = Depends(get_doctor_service),
) -> list[DoctorRead]:
    """List doctors by name; disabled doctors are hidden unless requested."""

    return service.list(status=status_filter, include_disabled=include_disabled)


@router.get("/{doctor_id}", response_model=DoctorRead)
def get_doctor(doctor_id: int, service: DoctorService = Depends(get_doctor_service)) -> DoctorRead:
    try:
        return service.get(doctor_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.patch("/{doctor_id}", response_model=DoctorRead)
def update_doctor(
    doctor_id: int,
    payload: DoctorUpdate,
    service: DoctorService = Depends(get_doctor_service),
) -> DoctorRead:
    try:
        return service.update(doctor_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_doctor(doctor_id: int, service: DoctorService = Depends(get_doctor_service)) -> Response:
    try:
        service.delete(doctor_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
