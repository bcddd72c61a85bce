"""Pydantic schemas for lab tests and orders."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from clinic.db.models import LabOrderStatus


class LabTestTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=120)
    default_unit: str | None = Field(default=None, max_length=32)
    default_reference_range: str | None = Field(default=None, max_length=64)


class LabTestTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str | None
    default_unit: str | None
    default_reference_range: str | None


class LabOrderCreate(BaseModel):
    """Order one or more tests for a patient."""

    patient_id: int = Field(..., ge=1)
    doctor_id: int | None = Field(default=None, ge=1)
    test_type_ids: list[int] = Field(..., min_length=1)
    notes: str | None = Field(default=None, max_length=500)


class LabResultUpdate(BaseModel):
    result_value: str = Field(..., min_length=1, max_length=64)
    result_unit: str | None = Field(default=None, max_length=32)
    reference_range: str | None = Field(default=None, max_length=64)
    result_flag: str | None = Field(default=None, max_length=16)


class LabOrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int
    doctor_id: int | None
    test_type: LabTestTypeRead
    ordered_at: datetime
    status: LabOrderStatus
    result_value: str | None
    result_unit: str | None
    reference_range: str | None
    result_flag: str | None
    notes: str | None


class LabCategoryGroup(BaseModel):
    category: str
    orders: list[LabOrderRead]


class PatientLabOrdersResponse(BaseModel):
    patient_id: int
    categories: list[LabCategoryGroup]
