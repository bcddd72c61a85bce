"""Repository for prescriptions."""
from __future__ import annotations

from clinic.db.models import Prescription

from .base import TenantScopedRepository


class PrescriptionRepository(TenantScopedRepository[Prescription]):
    model = Prescription
    default_order = (Prescription.issued_at.desc(), Prescription.id.desc())

    def list_for_patient(self, patient_id: int) -> list[Prescription]:
        return self.list({"patient_id": patient_id}, limit=None)
