"""Repositories for the lab test catalogue and orders."""
from __future__ import annotations

from sqlalchemy import select

from clinic.db.models import LabTestOrder, LabTestType

from .base import Repository, TenantScopedRepository


class LabTestTypeRepository(Repository[LabTestType]):
    """Lab test types are a global catalogue shared across organisations."""

    model = LabTestType

    def get_many(self, type_ids: list[int]) -> dict[int, LabTestType]:
        if not type_ids:
            return {}
        statement = select(self.model).where(self.model.id.in_(type_ids))
        return {row.id: row for row in self.session.scalars(statement).all()}


class LabTestOrderRepository(TenantScopedRepository[LabTestOrder]):
    model = LabTestOrder
    default_order = (LabTestOrder.ordered_at, LabTestOrder.id)

    def list_for_patient(self, patient_id: int) -> list[LabTestOrder]:
        return self.list({"patient_id": patient_id}, limit=None)
