"""Tests for GraphQL context utilities."""
from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException, status
from starlette.requests import Request

from clinic.core.tenant import TenantContext
from clinic.db.models import UserRole
from clinic.graphql import context as graphql_context


async def _empty_receive() -> dict[str, str]:
    await asyncio.sleep(0)
    return {"type": "http.request"}


def _make_request(headers: dict[str, str]) -> Request:
    raw_headers = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in headers.items()
    ]
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/graphql",
        "headers": raw_headers,
    }
    return Request(scope, _empty_receive)


class DummySession:
    def __init__(self) -> None:
        self.closed = False

    def __enter__(self) -> "DummySession":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.closed = True
        return False


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc123", "abc123"),
        ("bearer   abc123 ", "abc123"),
        ("Basic abc123", None),
        ("Bearer ", None),
        (None, None),
    ],
)
def test_bearer_token_parsing(header, expected) -> None:
    assert graphql_context.bearer_token(header) == expected


def test_graphql_context_sessions_and_scoped_client() -> None:
    tenant = TenantContext(organisation_id=4, role=UserRole.DOCTOR)
    sessions = [object(), object()]
    session_factory = MagicMock(side_effect=sessions)

    context = graphql_context.GraphQLContext(tenant=tenant, session_factory=session_factory, strict=True)

    assert context.get_session() is sessions[0]
    client = context.scoped_client(context.get_session())
    assert client.session is sessions[1]
    assert client.context is tenant
    assert client.strict is True


def test_build_context_resolves_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    tenant = TenantContext(organisation_id=4, user_id=9, role=UserRole.SECRETARY)
    resolve_mock = MagicMock(return_value=tenant)
    created: list[DummySession] = []

    def build_dummy_session() -> DummySession:
        created.append(DummySession())
        return created[-1]

    session_factory = MagicMock(side_effect=build_dummy_session)
    monkeypatch.setattr(graphql_context, "resolve_identity", resolve_mock)
    monkeypatch.setattr(graphql_context, "SessionLocal", session_factory)

    result = graphql_context.build_context("token-1")

    assert result.tenant is tenant
    assert result.session_factory is session_factory
    resolve_mock.assert_called_once_with(created[0], "token-1")
    assert created[0].closed is True


def test_build_context_rejects_unknown_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(graphql_context, "resolve_identity", MagicMock(return_value=None))
    monkeypatch.setattr(graphql_context, "SessionLocal", DummySession)

    with pytest.raises(HTTPException) as exc_info:
        graphql_context.build_context("expired")

    assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED


def test_context_getter_passes_bearer_token(monkeypatch: pytest.MonkeyPatch) -> None:
    expected = object()
    build_mock = MagicMock(return_value=expected)
    monkeypatch.setattr(graphql_context, "build_context", build_mock)

    result = graphql_context.context_getter(_make_request({"Authorization": "Bearer tok"}))

    assert result is expected
    build_mock.assert_called_once_with("tok")


def test_context_getter_missing_token_is_unauthorized() -> None:
    with pytest.raises(HTTPException) as exc_info:
        graphql_context.context_getter(_make_request({}))

    assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
