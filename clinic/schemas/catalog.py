"""Pydantic schemas for the billable service catalogue."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, field_validator


class ServiceCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    amount: PositiveFloat

    @field_validator("code")
    @classmethod
    def code_upper(cls, value: str) -> str:
        return value.strip().upper()


class ServiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int
    code: str
    name: str
    description: str | None
    amount: float
