"""Pydantic schemas for patient records."""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatientCreate(BaseModel):
    """Payload for registering a patient."""

    name: str = Field(..., min_length=1, max_length=255)
    birthdate: date | None = None
    gender: str | None = Field(default=None, max_length=20)
    phone_number: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=255)


class PatientUpdate(BaseModel):
    """Partial update; only supplied fields are written."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    birthdate: date | None = None
    gender: str | None = Field(default=None, max_length=20)
    phone_number: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, value: str | None) -> str | None:
        if value is None:
            raise ValueError("name cannot be null")
        return value


class PatientRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    name: str
    birthdate: date | None
    gender: str | None
    phone_number: str | None
    email: str | None
    address: str | None
    created_at: datetime


class PatientListResponse(BaseModel):
    """Paginated patient list."""

    items: list[PatientRead]
    total: int
