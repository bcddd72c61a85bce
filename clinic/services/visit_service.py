"""Patient visits: opening, progress and weekday statistics."""
from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

from clinic.core.scoping import ScopedClient
from clinic.db.base import as_utc
from clinic.db.models import AppointmentStatus, PatientVisit, VisitStatus
from clinic.repositories.appointment import AppointmentRepository
from clinic.repositories.doctor import DoctorRepository
from clinic.repositories.patient import PatientRepository
from clinic.repositories.radiology import RadiologyOrderRepository
from clinic.repositories.visit import VisitRepository
from clinic.schemas.radiology import RadiologyOrderRead
from clinic.schemas.visit import VisitCreate, VisitDayCount, VisitDetail, VisitDoctorUpdate, VisitRead

from .exceptions import ConflictError, NotFoundError, ValidationError
from .periods import utc_now

DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
DISTRIBUTION_WINDOW = timedelta(days=30)
CLOCK_FORMAT = "%H:%M"


class VisitService:
    """Tenant-scoped visit operations."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.visits = VisitRepository(client)
        self.appointments = AppointmentRepository(client)
        self.patients = PatientRepository(client)
        self.doctors = DoctorRepository(client)
        self.radiology_orders = RadiologyOrderRepository(client)

    def _require(self, visit_id: int) -> PatientVisit:
        visit = self.visits.get(visit_id)
        if visit is None:
            raise NotFoundError("Visit")
        return visit

    def _read(self, visit: PatientVisit) -> VisitRead:
        self.session.commit()
        self.session.refresh(visit)
        return VisitRead.model_validate(visit)

    def create(self, payload: VisitCreate, now: datetime | None = None) -> VisitRead:
        patient_id, doctor_id, visit_date = payload.patient_id, payload.doctor_id, payload.visit_date
        if payload.appointment_id is not None:
            appointment = self.appointments.get(payload.appointment_id)
            if appointment is None:
                raise ValidationError(f"Appointment {payload.appointment_id} does not exist")
            if patient_id is not None and patient_id != appointment.patient_id:
                raise ValidationError(f"Appointment {appointment.id} belongs to another patient")
            if self.visits.first({"appointment_id": appointment.id}) is not None:
                raise ConflictError(f"Appointment {appointment.id} already has a visit")
            patient_id = appointment.patient_id
            if doctor_id is None:
                doctor_id = appointment.doctor_id
            if visit_date is None:
                visit_date = as_utc(appointment.appointment_date).date()

        if self.patients.get(patient_id) is None:
            raise ValidationError(f"Patient {patient_id} does not exist")
        if doctor_id is not None and self.doctors.get(doctor_id) is None:
            raise ValidationError(f"Doctor {doctor_id} does not exist")

        try:
            visit = self.visits.create(
                patient_id=patient_id,
                doctor_id=doctor_id,
                appointment_id=payload.appointment_id,
                visit_date=visit_date or as_utc(now or utc_now()).date(),
                status=VisitStatus.SCHEDULED,
                notes=payload.notes,
            )
            self.session.commit()
        except IntegrityError as exc:  # pragma: no cover - concurrent insert
            self.session.rollback()
            raise ConflictError(f"Appointment {payload.appointment_id} already has a visit") from exc
        self.session.refresh(visit)
        return VisitRead.model_validate(visit)

    def get(self, visit_id: int) -> VisitDetail:
        visit = self._require(visit_id)
        orders = [RadiologyOrderRead.model_validate(order) for order in self.radiology_orders.list_for_visit(visit.id)]
        return VisitDetail(**VisitRead.model_validate(visit).model_dump(), radiology_orders=orders)

    def by_appointments(self, appointment_ids: list[int]) -> dict[int, VisitRead]:
        """Map each appointment that has a visit to that visit; others are absent."""

        return {
            visit.appointment_id: VisitRead.model_validate(visit)
            for visit in self.visits.for_appointments(appointment_ids)
            if visit.appointment_id is not None
        }

    def _transition(self, visit_id: int, target: VisitStatus, *allowed: VisitStatus, **changes) -> PatientVisit:
        visit = self._require(visit_id)
        if visit.status not in allowed:
            raise ValidationError(f"Cannot move a {visit.status.value} visit to {target.value}")
        self.visits.update(visit_id, status=target, **changes)
        return visit

    def start(self, visit_id: int, now: datetime | None = None) -> VisitRead:
        clock = as_utc(now or utc_now()).strftime(CLOCK_FORMAT)
        visit = self._transition(visit_id, VisitStatus.IN_PROGRESS, VisitStatus.SCHEDULED, start_time=clock)
        return self._read(visit)

    def complete(self, visit_id: int, now: datetime | None = None) -> VisitRead:
        """Close an in-progress visit and mark its appointment completed."""

        clock = as_utc(now or utc_now()).strftime(CLOCK_FORMAT)
        visit = self._transition(visit_id, VisitStatus.COMPLETED, VisitStatus.IN_PROGRESS, end_time=clock)
        if visit.appointment_id is not None:
            self.appointments.update(visit.appointment_id, status=AppointmentStatus.COMPLETED)
        return self._read(visit)

    def cancel(self, visit_id: int) -> VisitRead:
        visit = self._transition(
            visit_id, VisitStatus.CANCELLED, VisitStatus.SCHEDULED, VisitStatus.IN_PROGRESS
        )
        return self._read(visit)

    def assign_doctor(self, visit_id: int, payload: VisitDoctorUpdate) -> VisitRead:
        visit = self._require(visit_id)
        if self.doctors.get(payload.doctor_id) is None:
            raise ValidationError(f"Doctor {payload.doctor_id} does not exist")
        self.visits.update(visit_id, doctor_id=payload.doctor_id)
        return self._read(visit)

    def days_distribution(self, now: datetime | None = None) -> list[VisitDayCount]:
        """Count visits of the last 30 days per weekday, Sunday first."""

        since = (as_utc(now or utc_now()) - DISTRIBUTION_WINDOW).date()
        counts = [0] * len(DAY_NAMES)
        for visit_date in self.visits.visit_dates_since(since):
            counts[(visit_date.weekday() + 1) % 7] += 1
        return [VisitDayCount(day=day, count=count) for day, count in zip(DAY_NAMES, counts)]
