"""Repository for staff user accounts."""
from __future__ import annotations

from clinic.db.models import User

from .base import TenantScopedRepository


class UserRepository(TenantScopedRepository[User]):
    """Users are not tenant-scoped; listings filter by organisation explicitly."""

    model = User
    default_order = (User.name, User.id)

    def list_for_organisation(self, organisation_id: int) -> list[User]:
        return self.list({"organisation_id": organisation_id}, limit=None)

    def get_in_organisation(self, organisation_id: int, user_id: int) -> User | None:
        return self.first({"organisation_id": organisation_id, "id": user_id})

    def get_by_email(self, email: str) -> User | None:
        return self.client.find_unique(self.model, {"email": email})
