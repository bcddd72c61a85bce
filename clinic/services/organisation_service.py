"""Organisation service handling the caller's organisation settings."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from clinic.core.scoping import ScopedClient
from clinic.core.tenant import AccessDeniedError
from clinic.db.models import UserRole
from clinic.repositories.organisation import OrganisationRepository
from clinic.schemas.organisation import OrganisationCreate, OrganisationRead

from .exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class OrganisationService:
    """Service responsible for organisation lifecycle actions."""

    def __init__(self, client: ScopedClient) -> None:
        self.session = client.session
        self.context = client.context
        self.organisations = OrganisationRepository(client.session)

    def current(self) -> OrganisationRead:
        if self.context is None or self.context.organisation_id is None:
            raise NotFoundError("Organisation")
        organisation = self.organisations.get(self.context.organisation_id)
        if organisation is None:
            raise NotFoundError("Organisation")
        return OrganisationRead.model_validate(organisation)

    def create(self, payload: OrganisationCreate) -> OrganisationRead:
        if self.context is not None and self.context.role is not UserRole.ADMIN:
            raise AccessDeniedError("Only administrators can create organisations")
        organisation = self.organisations.add(self.organisations.model(**payload.model_dump()))
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("Organisation name already exists") from exc
        self.session.refresh(organisation)
        logger.info("Created organisation %s", organisation.id)
        return OrganisationRead.model_validate(organisation)
