"""ORM layer: declarative base, UTC column type and the clinic models."""

from . import models
from .base import Base, TimestampMixin, UTCDateTime, as_utc
from .models import TenantScopedModel, tenant_scoped_models

__all__ = [
    "Base",
    "TimestampMixin",
    "UTCDateTime",
    "as_utc",
    "models",
    "TenantScopedModel",
    "tenant_scoped_models",
]
