"""Pydantic schemas for radiology exams and orders."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from clinic.db.models import RadiologyOrderStatus


class RadiologyExamTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(default=None, max_length=120)


class RadiologyExamTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str | None


class RadiologyOrderItem(BaseModel):
    exam_type_id: int = Field(..., ge=1)
    notes: str | None = Field(default=None, max_length=500)


class RadiologyOrderCreate(BaseModel):
    """Exams requested during one visit."""

    orders: list[RadiologyOrderItem] = Field(..., min_length=1)


class RadiologyOrderUpdate(BaseModel):
    """Partial update; a result without ``result_date`` is dated today."""

    exam_type_id: int | None = Field(default=None, ge=1)
    status: RadiologyOrderStatus | None = None
    result: str | None = Field(default=None, min_length=1, max_length=2000)
    result_date: date | None = None
    notes: str | None = Field(default=None, max_length=500)

    @field_validator("exam_type_id", "status")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class RadiologyOrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    patient_id: int
    visit_id: int | None
    doctor_id: int | None
    exam_type: RadiologyExamTypeRead
    ordered_at: datetime
    status: RadiologyOrderStatus
    result: str | None
    result_date: date | None
    notes: str | None


class RadiologyCategoryGroup(BaseModel):
    category: str
    orders: list[RadiologyOrderRead]


class PatientRadiologyOrdersResponse(BaseModel):
    patient_id: int
    categories: list[RadiologyCategoryGroup]
