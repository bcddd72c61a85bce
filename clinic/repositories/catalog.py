"""Repository for the billable service catalogue."""
from __future__ import annotations

from clinic.db.models import Service

from .base import TenantScopedRepository


class ServiceRepository(TenantScopedRepository[Service]):
    model = Service
    default_order = (Service.code,)

    def get_by_code(self, code: str) -> Service | None:
        return self.first({"code": code})
