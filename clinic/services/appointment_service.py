"""Appointment booking and listing."""
from __future__ import annotations

from datetime import datetime

from clinic.core.scoping import ScopedClient
from clinic.db.models import AppointmentStatus, PatientAppointment
from clinic.repositories.appointment import AppointmentRepository
from clinic.repositories.doctor import DoctorRepository
from clinic.repositories.patient import PatientRepository
from clinic.schemas.appointment import (
    AppointmentCreate,
    AppointmentDateFilter,
    AppointmentFilterParams,
    AppointmentListResponse,
    AppointmentRead,
)

from .exceptions import NotFoundError, ValidationError
from .periods import day_bounds, utc_now, week_bounds


class AppointmentService:
    """Tenant-scoped appointment operations."""

    def __init__(self, client: ScopedClient, default_page_size: int = 10) -> None:
        self.session = client.session
        self.default_page_size = default_page_size
        self.appointments = AppointmentRepository(client)
        self.patients = PatientRepository(client)
        self.doctors = DoctorRepository(client)

    def _require(self, appointment_id: int) -> PatientAppointment:
        appointment = self.appointments.get(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment")
        return appointment

    def create(self, payload: AppointmentCreate) -> AppointmentRead:
        if self.patients.get(payload.patient_id) is None:
            raise ValidationError(f"Patient {payload.patient_id} does not exist")
        if payload.doctor_id is not None and self.doctors.get(payload.doctor_id) is None:
            raise ValidationError(f"Doctor {payload.doctor_id} does not exist")
        appointment = self.appointments.create(
            patient_id=payload.patient_id,
            doctor_id=payload.doctor_id,
            appointment_date=payload.appointment_date,
            appointment_type=payload.appointment_type,
            notes=payload.notes,
            status=AppointmentStatus.SCHEDULED,
        )
        self.session.commit()
        self.session.refresh(appointment)
        return AppointmentRead.model_validate(appointment)

    def list(self, filters: AppointmentFilterParams, now: datetime | None = None) -> AppointmentListResponse:
        start = end = None
        if filters.date_filter is AppointmentDateFilter.TODAY:
            start, end = day_bounds(now or utc_now())
        elif filters.date_filter is AppointmentDateFilter.WEEK:
            start, end = week_bounds(now or utc_now())

        page_size = filters.page_size or self.default_page_size
        window = self.appointments.date_filter(start, end)
        where = self.appointments.build_filter(start, end, filters.status, filters.appointment_type)
        rows = self.appointments.list(where, offset=(filters.page - 1) * page_size, limit=page_size)
        return AppointmentListResponse(
            appointments=[AppointmentRead.model_validate(row) for row in rows],
            page=filters.page,
            page_size=page_size,
            total=self.appointments.count(where),
            status_options=self.appointments.distinct_values("status", window),
            type_options=self.appointments.distinct_values("appointment_type", window),
        )

    def get(self, appointment_id: int) -> AppointmentRead:
        return AppointmentRead.model_validate(self._require(appointment_id))

    def cancel(self, appointment_id: int) -> AppointmentRead:
        if self.appointments.update(appointment_id, status=AppointmentStatus.CANCELLED) == 0:
            raise NotFoundError("Appointment")
        appointment = self._require(appointment_id)
        self.session.commit()
        self.session.refresh(appointment)
        return AppointmentRead.model_validate(appointment)
