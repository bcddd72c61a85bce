"""Service catalogue REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from clinic.api.dependencies import get_catalog_service
from clinic.api.errors import map_service_error
from clinic.schemas.catalog import ServiceCreate, ServiceRead
from clinic.services.catalog_service import CatalogService
from clinic.services.exceptions import ServiceError

router = APIRouter(prefix="/services", tags=["services"])


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServiceCreate, service: CatalogService = Depends(get_catalog_service)) -> ServiceRead:
    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.get("", response_model=list[ServiceRead])
def list_services(service: CatalogService = Depends(get_catalog_service)) -> list[ServiceRead]:
    return service.list()


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(service_id: int, service: CatalogService = Depends(get_catalog_service)) -> ServiceRead:
    try:
        return service.get(service_id)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
