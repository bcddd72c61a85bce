"""Pydantic schemas for staff accounts."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from clinic.db.models import UserRole


class UserCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    role: UserRole = UserRole.SECRETARY


class UserRoleUpdate(BaseModel):
    role: UserRole


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organisation_id: int | None
    email: str
    name: str | None
    role: UserRole | None
    created_at: datetime
