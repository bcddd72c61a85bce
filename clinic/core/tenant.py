"""Tenant context utilities and multi-tenancy guardrails."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from clinic.db.models import Organisation, UserRole


class TenantAccessError(RuntimeError):
    """Base error for tenant access violations."""


class OrganisationNotFoundError(TenantAccessError):
    """Raised when an organisation cannot be located."""


class TenantContextRequiredError(TenantAccessError):
    """Raised in strict mode when a scoped operation runs without an organisation."""


class AccessDeniedError(TenantAccessError):
    """Raised when the caller's role does not permit a write."""


@dataclass(slots=True, frozen=True)
class TenantContext:
    """Request-local identity binding data access to one organisation.

    ``organisation_id`` is ``None`` for callers the identity provider has not
    assigned to an organisation; such contexts are not scoped.
    """

    organisation_id: int | None
    user_id: int | None = None
    role: UserRole | None = None

    @property
    def is_scoped(self) -> bool:
        return self.organisation_id is not None

    def owns(self, entity: Any) -> bool:
        """Return whether ``entity`` belongs to this context's organisation."""

        entity_organisation_id = getattr(entity, "organisation_id", None)
        if self.organisation_id is None or entity_organisation_id is None:
            return False
        return int(entity_organisation_id) == self.organisation_id


def load_organisation_context(session: Session, organisation_id: int) -> TenantContext:
    """Build an administrative context for background work on one organisation."""

    organisation = session.get(Organisation, organisation_id)
    if organisation is None:
        raise OrganisationNotFoundError(f"Organisation {organisation_id} not found")
    return TenantContext(organisation_id=organisation.id, role=UserRole.ADMIN)
