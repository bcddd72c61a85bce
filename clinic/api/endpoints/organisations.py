"""Organisation REST endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from clinic.api.dependencies import get_organisation_service
from clinic.api.errors import map_service_error
from clinic.schemas.organisation import OrganisationCreate, OrganisationRead
from clinic.services.exceptions import ServiceError
from clinic.services.organisation_service import OrganisationService

router = APIRouter(prefix="/organisations", tags=["organisations"])


@router.get("/current", response_model=OrganisationRead)
def get_current_organisation(
    service: OrganisationService = Depends(get_organisation_service),
) -> OrganisationRead:
    """Return the organisation the caller belongs to."""

    try:
        return service.current()
    except ServiceError as exc:
        raise map_service_error(exc) from exc


@router.post("", response_model=OrganisationRead, status_code=status.HTTP_201_CREATED)
def create_organisation(
    payload: OrganisationCreate,
    service: OrganisationService = Depends(get_organisation_service),
) -> OrganisationRead:
    """Create a new organisation (administrators only)."""

    try:
        return service.create(payload)
    except ServiceError as exc:
        raise map_service_error(exc) from exc
