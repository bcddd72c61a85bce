"""Pydantic schemas for organisation operations."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OrganisationCreate(BaseModel):
    """Payload to create a new organisation."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=120)
    phone_number: str | None = Field(default=None, max_length=40)
    email: str | None = Field(default=None, max_length=255)


class OrganisationRead(BaseModel):
    """Organisation representation returned by APIs."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str | None
    city: str | None
    phone_number: str | None
    email: str | None
    created_at: datetime
