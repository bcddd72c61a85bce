"""Service-layer exception hierarchy."""
from __future__ import annotations


class ServiceError(Exception):
    """Base service error."""


class NotFoundError(ServiceError):
    """Raised when an entity is missing or owned by another organisation."""

    def __init__(self, entity: str, message: str | None = None) -> None:
        super().__init__(message or f"{entity} not found")
        self.entity = entity


class ConflictError(ServiceError):
    """Raised when a uniqueness rule is violated."""


class ValidationError(ServiceError):
    """Raised when business validation fails."""
