"""Staff account management within the caller's organisation."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from clinic.core.scoping import ScopedClient
from clinic.db.models import User, UserRole
from clinic.repositories.user import UserRepository
from clinic.schemas.user import UserCreate, UserRead

from .exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserService:
    """User accounts are listed and changed only inside the caller's organisation."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.context = client.context
        self.users = UserRepository(client)

    def _organisation_id(self) -> int:
        if self.context is None or self.context.organisation_id is None:
            raise ValidationError("An organisation is required to manage users")
        return self.context.organisation_id

    def _require(self, user_id: int) -> User:
        user = self.users.get_in_organisation(self._organisation_id(), user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    def list(self) -> list[UserRead]:
        rows = self.users.list_for_organisation(self._organisation_id())
        return [UserRead.model_validate(row) for row in rows]

    def create(self, payload: UserCreate) -> UserRead:
        organisation_id = self._organisation_id()
        email = payload.email.strip().lower()
        if self.users.get_by_email(email) is not None:
            raise ConflictError("Email already registered")
        user = self.users.create(
            organisation_id=organisation_id,
            email=email,
            name=payload.name,
            role=payload.role,
        )
        try:
            self.session.commit()
        except IntegrityError as exc:  # pragma: no cover - concurrent insert
            self.session.rollback()
            raise ConflictError("Email already registered") from exc
        self.session.refresh(user)
        return UserRead.model_validate(user)

    def change_role(self, user_id: int, role: UserRole) -> UserRead:
        user = self._require(user_id)
        self.users.update(user.id, role=role)
        self.session.commit()
        self.session.refresh(user)
        logger.info("User %s role changed to %s", user.id, role.value)
        return UserRead.model_validate(user)

    def delete(self, user_id: int) -> None:
        user = self._require(user_id)
        self.users.delete(user.id)
        self.session.commit()
