"""Repositories for the radiology exam catalogue and orders."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select

from clinic.db.models import RadiologyExamType, RadiologyOrder

from .base import Repository, TenantScopedRepository


class RadiologyExamTypeRepository(Repository[RadiologyExamType]):
    """Exam types are a global catalogue listed alphabetically."""

    model = RadiologyExamType

    def list(self, offset: int = 0, limit: int = 1000) -> Sequence[RadiologyExamType]:
        statement = select(self.model).order_by(self.model.name).offset(offset).limit(limit)
        return self.session.scalars(statement).all()

    def get_many(self, type_ids: list[int]) -> dict[int, RadiologyExamType]:
        if not type_ids:
            return {}
        statement = select(self.model).where(self.model.id.in_(type_ids))
        return {row.id: row for row in self.session.scalars(statement).all()}


class RadiologyOrderRepository(TenantScopedRepository[RadiologyOrder]):
    model = RadiologyOrder
    default_order = (RadiologyOrder.ordered_at.desc(), RadiologyOrder.id.desc())

    def list_for_patient(self, patient_id: int) -> list[RadiologyOrder]:
        return self.list({"patient_id": patient_id}, limit=None)

    def list_for_visit(self, visit_id: int) -> list[RadiologyOrder]:
        return self.list({"visit_id": visit_id}, limit=None)
