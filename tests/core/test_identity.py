"""Tests for resolving identity-provider sessions into tenant contexts."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from clinic.core.identity import issue_session, resolve_identity
from clinic.db.models import User, UserRole, UserSession


def _user(session, organisation, role=UserRole.DOCTOR) -> User:
    user = User(organisation_id=organisation.id, email="dr@example.test", name="Dr Who", role=role)
    session.add(user)
    session.commit()
    return user


def test_resolve_identity_returns_context_for_live_session(session, organisation) -> None:
    user = _user(session, organisation)
    token = issue_session(session, user).token
    session.commit()

    context = resolve_identity(session, token)

    assert context is not None
    assert context.organisation_id == organisation.id
    assert context.user_id == user.id
    assert context.role is UserRole.DOCTOR


def test_resolve_identity_rejects_unknown_and_expired_tokens(session, organisation) -> None:
    user = _user(session, organisation)
    expired = UserSession(
        token="expired-token",
        user_id=user.id,
        expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )
    session.add(expired)
    session.commit()

    assert resolve_identity(session, "missing") is None
    assert resolve_identity(session, "expired-token") is None


def test_resolve_identity_honours_explicit_clock(session, organisation) -> None:
    user = _user(session, organisation)
    user_session = issue_session(session, user, ttl=timedelta(hours=1))
    session.commit()

    later = datetime.now(timezone.utc) + timedelta(hours=2)

    assert resolve_identity(session, user_session.token, now=later) is None


def test_issue_session_generates_distinct_tokens(session, organisation) -> None:
    user = _user(session, organisation)

    first = issue_session(session, user)
    second = issue_session(session, user)

    assert first.token != second.token
    assert len(first.token) >= 32
