"""Repository for organisation entities."""
from __future__ import annotations

from clinic.db.models import Organisation

from .base import Repository


class OrganisationRepository(Repository[Organisation]):
    """Organisation repository with simple CRUD helpers."""

    model = Organisation
