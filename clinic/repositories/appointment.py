"""Repository for patient appointments."""
from __future__ import annotations

from datetime import datetime

from clinic.core.scoping import Filter
from clinic.db.models import AppointmentStatus, PatientAppointment

from .base import TenantScopedRepository


class AppointmentRepository(TenantScopedRepository[PatientAppointment]):
    """Appointment repository with date-window filtering."""

    model = PatientAppointment
    default_order = (PatientAppointment.appointment_date.desc(), PatientAppointment.id.desc())

    def date_filter(self, start: datetime | None, end: datetime | None) -> Filter:
        scoped = Filter()
        if start is not None:
            scoped = scoped.and_(self.model.appointment_date >= start)
        if end is not None:
            scoped = scoped.and_(self.model.appointment_date <= end)
        return scoped

    def build_filter(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        status: AppointmentStatus | None = None,
        appointment_type: str | None = None,
    ) -> Filter:
        scoped = self.date_filter(start, end)
        if status is not None:
            scoped = scoped.and_(status=status)
        if appointment_type:
            scoped = scoped.and_(appointment_type=appointment_type)
        return scoped

    def distinct_values(self, column: str, where: Filter) -> list[str]:
        values: set[str] = set()
        for row in self.list(where, limit=None):
            value = getattr(row, column)
            if isinstance(value, AppointmentStatus):
                value = value.value
            if value:
                values.add(value)
        return sorted(values)
