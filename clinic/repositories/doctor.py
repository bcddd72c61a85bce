"""Repository for doctor entities."""
from __future__ import annotations

from clinic.db.models import Doctor, DoctorStatus

from .base import TenantScopedRepository


class DoctorRepository(TenantScopedRepository[Doctor]):
    model = Doctor
    default_order = (Doctor.name, Doctor.id)

    def list_by_status(self, status: DoctorStatus | None) -> list[Doctor]:
        where = {"status": status} if status is not None else None
        return self.list(where, limit=None)
