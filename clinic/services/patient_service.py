"""Patient service exposing tenant-scoped operations."""
from __future__ import annotations

from clinic.core.scoping import ScopedClient
from clinic.db.models import Patient
from clinic.repositories.patient import PatientRepository
from clinic.schemas.patient import PatientCreate, PatientListResponse, PatientRead, PatientUpdate

from .exceptions import NotFoundError


class PatientService:
    """Tenant-scoped patient operations."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.patients = PatientRepository(client)

    def _require(self, patient_id: int) -> Patient:
        patient = self.patients.get(patient_id)
        if patient is None:
            raise NotFoundError("Patient")
        return patient

    def create(self, payload: PatientCreate) -> PatientRead:
        patient = self.patients.create(**payload.model_dump())
        self.session.commit()
        self.session.refresh(patient)
        return PatientRead.model_validate(patient)

    def list(self, search: str | None = None, offset: int = 0, limit: int = 100) -> PatientListResponse:
        rows = self.patients.search(search, offset=offset, limit=limit)
        return PatientListResponse(
            items=[PatientRead.model_validate(row) for row in rows],
            total=self.patients.count_search(search),
        )

    def get(self, patient_id: int) -> PatientRead:
        return PatientRead.model_validate(self._require(patient_id))

    def update(self, patient_id: int, payload: PatientUpdate) -> PatientRead:
        changes = payload.model_dump(exclude_unset=True)
        if changes and self.patients.update(patient_id, **changes) == 0:
            raise NotFoundError("Patient")
        patient = self._require(patient_id)
        self.session.commit()
        self.session.refresh(patient)
        return PatientRead.model_validate(patient)

    def delete(self, patient_id: int) -> None:
        if self.patients.delete(patient_id) == 0:
            raise NotFoundError("Patient")
        self.session.commit()
