"""Billable service catalogue."""
from __future__ import annotations

from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from clinic.core.scoping import ScopedClient
from clinic.repositories.catalog import ServiceRepository
from clinic.schemas.catalog import ServiceCreate, ServiceRead

from .exceptions import ConflictError, NotFoundError


class CatalogService:
    """Service codes are unique within an organisation."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.services = ServiceRepository(client)

    def create(self, payload: ServiceCreate) -> ServiceRead:
        if self.services.get_by_code(payload.code) is not None:
            raise ConflictError(f"Service code {payload.code} already exists")
        service = self.services.create(
            code=payload.code,
            name=payload.name,
            description=payload.description,
            amount=Decimal(str(payload.amount)),
        )
        try:
            self.session.commit()
        except IntegrityError as exc:  # pragma: no cover - concurrent insert
            self.session.rollback()
            raise ConflictError(f"Service code {payload.code} already exists") from exc
        self.session.refresh(service)
        return ServiceRead.model_validate(service)

    def list(self) -> list[ServiceRead]:
        return [ServiceRead.model_validate(row) for row in self.services.list(limit=None)]

    def get(self, service_id: int) -> ServiceRead:
        service = self.services.get(service_id)
        if service is None:
            raise NotFoundError("Service")
        return ServiceRead.model_validate(service)
