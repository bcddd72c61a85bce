"""Pydantic schemas for doctors."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from clinic.db.models import DoctorStatus


class DoctorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    specialty: str | None = Field(default=None, max_length=120)
    phone_number: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)
    status: DoctorStatus = DoctorStatus.ENABLED


class DoctorUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    specialty: str | None = Field(default=None, max_length=120)
    phone_number: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)
    status: DoctorStatus | None = None

    @field_validator("name", "status")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class DoctorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    name: str
    specialty: str | None
    phone_number: str | None
    email: str | None
    status: DoctorStatus
    created_at: datetime
