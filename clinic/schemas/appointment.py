"""Pydantic schemas for patient appointments."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from clinic.db.models import AppointmentStatus


class AppointmentDateFilter(str, Enum):
    TODAY = "today"
    WEEK = "week"


class AppointmentCreate(BaseModel):
    """Payload for booking an appointment."""

    patient_id: int = Field(..., ge=1)
    doctor_id: int | None = Field(default=None, ge=1)
    appointment_date: datetime
    appointment_type: str | None = Field(default=None, max_length=64)
    notes: str | None = Field(default=None, max_length=1000)


class AppointmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int
    doctor_id: int | None
    appointment_date: datetime
    appointment_type: str | None
    status: AppointmentStatus
    notes: str | None
    created_at: datetime


class AppointmentFilterParams(BaseModel):
    """Query parameters for appointment listing."""

    date_filter: AppointmentDateFilter | None = None
    status: AppointmentStatus | None = None
    appointment_type: str | None = None
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1, le=500)


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentRead]
    page: int
    page_size: int
    total: int
    status_options: list[str]
    type_options: list[str]
