"""Bridge between identity-provider sessions and tenant contexts."""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from clinic.db.base import as_utc
from clinic.db.models import User, UserSession

from .tenant import TenantContext

DEFAULT_SESSION_TTL = timedelta(hours=12)


def issue_session(session: Session, user: User, ttl: timedelta = DEFAULT_SESSION_TTL) -> UserSession:
    """Persist a new session token for ``user``; called by the provider callback."""

    user_session = UserSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=datetime.now(timezone.utc) + ttl,
    )
    session.add(user_session)
    session.flush()
    return user_session


def resolve_identity(session: Session, token: str, now: datetime | None = None) -> TenantContext | None:
    """Return a fresh context for a live session token, or ``None``."""

    statement = select(UserSession).where(UserSession.token == token)
    user_session = session.scalar(statement)
    if user_session is None:
        return None
    current = now or datetime.now(timezone.utc)
    if user_session.expires_at <= as_utc(current):
        return None
    user = user_session.user
    return TenantContext(organisation_id=user.organisation_id, user_id=user.id, role=user.role)
