"""Repository for patient visits."""
from __future__ import annotations

from datetime import date

from clinic.db.models import PatientVisit

from .base import TenantScopedRepository


class VisitRepository(TenantScopedRepository[PatientVisit]):
    model = PatientVisit
    default_order = (PatientVisit.visit_date.desc(), PatientVisit.id.desc())

    def for_appointments(self, appointment_ids: list[int]) -> list[PatientVisit]:
        if not appointment_ids:
            return []
        return self.list(self.model.appointment_id.in_(appointment_ids), limit=None)

    def visit_dates_since(self, since: date) -> list[date]:
        return [visit.visit_date for visit in self.list(self.model.visit_date >= since, limit=None)]
