"""Pydantic schemas for patient visits."""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clinic.db.models import VisitStatus

from .radiology import RadiologyOrderRead


class VisitCreate(BaseModel):
    """Open a visit for a patient, or from a booked appointment.

    When ``appointment_id`` is given the patient and doctor default to the
    appointment's, and ``visit_date`` to its day.
    """

    patient_id: int | None = Field(default=None, ge=1)
    appointment_id: int | None = Field(default=None, ge=1)
    doctor_id: int | None = Field(default=None, ge=1)
    visit_date: date | None = None
    notes: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def require_patient_or_appointment(self) -> "VisitCreate":
        if self.patient_id is None and self.appointment_id is None:
            raise ValueError("patient_id or appointment_id is required")
        return self


class VisitDoctorUpdate(BaseModel):
    doctor_id: int = Field(..., ge=1)


class VisitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int
    doctor_id: int | None
    appointment_id: int | None
    visit_date: date
    start_time: str | None
    end_time: str | None
    status: VisitStatus
    notes: str | None
    created_at: datetime


class VisitDetail(VisitRead):
    radiology_orders: list[RadiologyOrderRead] = Field(default_factory=list)


class VisitDayCount(BaseModel):
    day: str
    count: int
