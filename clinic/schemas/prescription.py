"""Pydantic schemas for prescriptions."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PrescriptionItem(BaseModel):
    """One prescribed drug with its posology."""

    drug: str = Field(..., min_length=1, max_length=255)
    dosage: str | None = Field(default=None, max_length=120)
    frequency: str | None = Field(default=None, max_length=120)
    duration: str | None = Field(default=None, max_length=120)


class PrescriptionCreate(BaseModel):
    patient_id: int = Field(..., ge=1)
    doctor_id: int | None = Field(default=None, ge=1)
    issued_at: datetime | None = None
    items: list[PrescriptionItem]
    notes: str | None = Field(default=None, max_length=1000)


class PrescriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int
    doctor_id: int | None
    issued_at: datetime
    items: list[PrescriptionItem]
    notes: str | None
