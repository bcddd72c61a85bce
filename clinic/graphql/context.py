"""GraphQL context utilities for tenant-aware operations."""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request, status
from sqlalchemy.orm import Session, sessionmaker
from strawberry.fastapi import BaseContext

from clinic.core.database import SessionLocal
from clinic.core.identity import resolve_identity
from clinic.core.scoping import ScopedClient
from clinic.core.settings import get_settings
from clinic.core.tenant import TenantContext

BEARER_PREFIX = "bearer "


@dataclass(slots=True)
class GraphQLContext(BaseContext):
    """GraphQL-specific request context containing the tenant and DB session factory."""

    tenant: TenantContext
    session_factory: sessionmaker[Session]
    strict: bool = False

    def get_session(self) -> Session:
        """Return a new SQLAlchemy session for resolver use."""

        return self.session_factory()

    def scoped_client(self, session: Session) -> ScopedClient:
        return ScopedClient(session, self.tenant, strict=self.strict)


def bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def build_context(token: str) -> GraphQLContext:
    """Construct a GraphQL context from a session token."""

    settings = get_settings()
    with SessionLocal() as session:
        tenant_context = resolve_identity(session, token)
    if tenant_context is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired session")
    if settings.require_organisation and tenant_context.organisation_id is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is not assigned to an organisation")
    return GraphQLContext(tenant=tenant_context, session_factory=SessionLocal, strict=settings.tenant_scope_strict)


def context_getter(request: Request) -> GraphQLContext:
    """FastAPI-compatible context getter for Strawberry GraphQL router."""

    token = bearer_token(request.headers.get("authorization"))
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return build_context(token)
