"""Radiology REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from clinic.api.dependencies import get_radiology_service
from clinic.api.errors import map_service_error
from clinic.schemas.radiology import (
    RadiologyExamTypeCreate,
    RadiologyExamTypeRead,
    RadiologyOrderRead,
    RadiologyOrderUpdate,
)
from clinic.services.exceptions import ServiceError
from clinic.services.radiology_service import RadiologyService

router = APIRouter(prefix="/radiology", tags=["radiology"])


@router.get("/exam-types", response_model=list[RadiologyExamTypeRead])
def list_exam_types(service: RadiologyService = Depends(get_radiology_service)) -> list[RadiologyExamTypeRead]:
    return service.list_exam_types()


@router.post("/exam-types", response_model=RadiologyExamTypeRead, status_code=status.HTTP_201_CREATED)
def register_exam_type(
    payload: RadiologyExamTypeCreate,
    service: RadiologyService = Depends(get_radiology_service),
) -> RadiologyExamTypeRead:
    try:
        return service.register_exam_type(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.patch("/orders/{order_id}", response_model=RadiologyOrderRead)
def update_order(
    order_id: int,
    payload: RadiologyOrderUpdate,
    service: RadiologyService = Depends(get_radiology_service),
) -> RadiologyOrderRead:
    try:
        return service.update(order_id, payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, service: RadiologyService = Depends(get_radiology_service)) -> Response:
    try:
        service.delete(order_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
