"""Prescription service."""
from __future__ import annotations

from clinic.core.scoping import ScopedClient
from clinic.repositories.doctor import DoctorRepository
from clinic.repositories.patient import PatientRepository
from clinic.repositories.prescription import PrescriptionRepository
from clinic.schemas.prescription import PrescriptionCreate, PrescriptionRead

from .exceptions import NotFoundError, ValidationError
from .periods import utc_now


class PrescriptionService:
    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.prescriptions = PrescriptionRepository(client)
        self.patients = PatientRepository(client)
        self.doctors = DoctorRepository(client)

    def create(self, payload: PrescriptionCreate) -> PrescriptionRead:
        if not payload.items:
            raise ValidationError("A prescription needs at least one item")
        if self.patients.get(payload.patient_id) is None:
            raise ValidationError(f"Patient {payload.patient_id} does not exist")
        if payload.doctor_id is not None and self.doctors.get(payload.doctor_id) is None:
            raise ValidationError(f"Doctor {payload.doctor_id} does not exist")
        prescription = self.prescriptions.create(
            patient_id=payload.patient_id,
            doctor_id=payload.doctor_id,
            issued_at=payload.issued_at or utc_now(),
            items=[item.model_dump() for item in payload.items],
            notes=payload.notes,
        )
        self.session.commit()
        self.session.refresh(prescription)
        return PrescriptionRead.model_validate(prescription)

    def list_for_patient(self, patient_id: int) -> list[PrescriptionRead]:
        if self.patients.get(patient_id) is None:
            raise NotFoundError("Patient")
        rows = self.prescriptions.list_for_patient(patient_id)
        return [PrescriptionRead.model_validate(row) for row in rows]

    def get(self, prescription_id: int) -> PrescriptionRead:
        prescription = self.prescriptions.get(prescription_id)
        if prescription is None:
            raise NotFoundError("Prescription")
        return PrescriptionRead.model_validate(prescription)
