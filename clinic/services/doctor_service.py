"""Doctor roster management."""
from __future__ import annotations

from clinic.core.scoping import ScopedClient
from clinic.db.models import Doctor, DoctorStatus
from clinic.repositories.doctor import DoctorRepository
from clinic.schemas.doctor import DoctorCreate, DoctorRead, DoctorUpdate

from .exceptions import NotFoundError


class DoctorService:
    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.doctors = DoctorRepository(client)

    def _require(self, doctor_id: int) -> Doctor:
        doctor = self.doctors.get(doctor_id)
        if doctor is None:
            raise NotFoundError("Doctor")
        return doctor

    def create(self, payload: DoctorCreate) -> DoctorRead:
        doctor = self.doctors.create(**payload.model_dump())
        self.session.commit()
        self.session.refresh(doctor)
        return DoctorRead.model_validate(doctor)

    def list(self, status: DoctorStatus | None = None, include_disabled: bool = False) -> list[DoctorRead]:
        """List doctors by name; only enabled doctors unless told otherwise."""

        if status is None and not include_disabled:
            status = DoctorStatus.ENABLED
        return [DoctorRead.model_validate(row) for row in self.doctors.list_by_status(status)]

    def get(self, doctor_id: int) -> DoctorRead:
        return DoctorRead.model_validate(self._require(doctor_id))

    def update(self, doctor_id: int, payload: DoctorUpdate) -> DoctorRead:
        doctor = self._require(doctor_id)
        changes = payload.model_dump(exclude_unset=True)
        if changes:
            self.doctors.update(doctor.id, **changes)
        self.session.commit()
        self.session.refresh(doctor)
        return DoctorRead.model_validate(doctor)

    def delete(self, doctor_id: int) -> None:
        doctor = self._require(doctor_id)
        self.doctors.delete(doctor.id)
        self.session.commit()
