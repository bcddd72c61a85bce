"""Patient repository handling search queries."""
from __future__ import annotations

from sqlalchemy import or_

from clinic.core.scoping import Filter
from clinic.db.models import Patient

from .base import TenantScopedRepository


class PatientRepository(TenantScopedRepository[Patient]):
    """Patient repository with free-text search helpers."""

    model = Patient
    default_order = (Patient.name, Patient.id)

    def search_filter(self, term: str | None) -> Filter:
        if not term:
            return Filter()
        pattern = f"%{term.strip()}%"
        return Filter().and_(
            or_(
                self.model.name.ilike(pattern),
                self.model.email.ilike(pattern),
                self.model.phone_number.ilike(pattern),
            )
        )

    def search(self, term: str | None, offset: int = 0, limit: int = 100) -> list[Patient]:
        return self.list(self.search_filter(term), offset=offset, limit=limit)

    def count_search(self, term: str | None) -> int:
        return self.count(self.search_filter(term))
