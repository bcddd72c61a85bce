"""Patient visit REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from clinic.api.dependencies import get_radiology_service, get_visit_service
from clinic.api.errors import map_service_error
from clinic.schemas.radiology import RadiologyOrderCreate, RadiologyOrderRead
from clinic.schemas.visit import VisitCreate, VisitDayCount, VisitDetail, VisitDoctorUpdate, VisitRead
from clinic.services.exceptions import ServiceError
from clinic.services.radiology_service import RadiologyService
from clinic.services.visit_service import VisitService

router = APIRouter(prefix="/visits", tags=["visits"])


@router.post("", response_model=VisitRead, status_code=status.HTTP_201_CREATED)
def open_visit(payload: VisitCreate, service: VisitService = Depends(get_visit_service)) -> VisitRead:
    """Open a visit for a patient or from one of their appointments."""

    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("/by-appointments", response_model=dict[int, VisitRead])
def visits_by_appointments(
    appointment_ids: list[int] = Query(default=[]),
    service: VisitService = Depends(get_visit_service),
) -> dict[int, VisitRead]:
    return service.by_appointments(appointment_ids)


@router.get("/days-distribution", response_model=list[VisitDayCount])
def visit_days_distribution(service: VisitService = Depends(get_visit_service)) -> list[VisitDayCount]:
    """Visits of the last 30 days counted per weekday, Sunday first."""

    return service.days_distribution()


@router.get("/{visit_id}", response_model=VisitDetail)
def get_visit(visit_id: int, service: VisitService = Depends(get_visit_service)) -> VisitDetail:
    try:
        return service.get(visit_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("/{visit_id}/start", response_model=VisitRead)
def start_visit(visit_id: int, service: VisitService = Depends(get_visit_service)) -> VisitRead:
    try:
        return service.start(visit_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("/{visit_id}/complete", response_model=VisitRead)
def complete_visit(visit_id: int, service: VisitService = Depends(get_visit_service)) -> VisitRead:
    try:
        return service.complete(visit_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("/{visit_id}/cancel", response_model=VisitRead)
def cancel_visit(visit_id: int, service: VisitService = Depends(get_visit_service)) -> VisitRead:
    try:
        return service.cancel(visit_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.patch("/{visit_id}/doctor", response_model=VisitRead)
def assign_visit_doctor(
    visit_id: int,
    payload: VisitDoctorUpdate,
    service: VisitService = Depends(get_visit_service),
) -> VisitRead:
    try:
        return service.assign_doctor(visit_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("/{visit_id}/radiology-orders", response_model=list[RadiologyOrderRead])
def list_visit_radiology_orders(
    visit_id: int,
    service: RadiologyService = Depends(get_radiology_service),
) -> list[RadiologyOrderRead]:
    try:
        return service.visit_orders(visit_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post(
    "/{visit_id}/radiology-orders",
    response_model=list[RadiologyOrderRead],
    status_code=status.HTTP_201_CREATED,
)
def order_radiology_exams(
    visit_id: int,
    payload: RadiologyOrderCreate,
    service: RadiologyService = Depends(get_radiology_service),
) -> list[RadiologyOrderRead]:
    """Order exams for the visit's patient, prescribed by the visit's doctor."""

    try:
        return service.order(visit_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
