"""Lab test REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from clinic.api.dependencies import get_lab_service
from clinic.api.errors import map_service_error
from clinic.schemas.lab import LabOrderCreate, LabOrderRead, LabResultUpdate, LabTestTypeCreate, LabTestTypeRead
from clinic.services.exceptions import ServiceError
from clinic.services.lab_service import LabService

router = APIRouter(prefix="/lab", tags=["lab"])


@router.get("/test-types", response_model=list[LabTestTypeRead])
def list_test_types(service: LabService = Depends(get_lab_service)) -> list[LabTestTypeRead]:
    return service.list_test_types()


@router.post("/test-types", response_model=LabTestTypeRead, status_code=status.HTTP_201_CREATED)
def register_test_type(
    payload: LabTestTypeCreate,
    service: LabService = Depends(get_lab_service),
) -> LabTestTypeRead:
    try:
        return service.register_test_type(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("/orders", response_model=list[LabOrderRead], status_code=status.HTTP_201_CREATED)
def order_tests(payload: LabOrderCreate, service: LabService = Depends(get_lab_service)) -> list[LabOrderRead]:
    """Order one or more lab tests for a patient."""

    try:
        return service.order(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.put("/orders/{order_id}/result", response_model=LabOrderRead)
def record_result(
    order_id: int,
    payload: LabResultUpdate,
    service: LabService = Depends(get_lab_service),
) -> LabOrderRead:
    try:
        return service.record_result(order_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
