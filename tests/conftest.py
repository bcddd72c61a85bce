"""Shared pytest fixtures for the clinic practice API tests."""
from __future__ import annotations

import os
from collections.abc import Callable, Generator

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from clinic.core.database import get_db_session
from clinic.core.identity import issue_session
from clinic.core.scoping import ScopedClient
from clinic.core.tenant import TenantContext
from clinic.db.base import Base
from clinic.db.models import Organisation, User, UserRole
from clinic.main import create_app


@pytest.fixture()
def engine() -> Generator:
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session(engine) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False)
    db_session = SessionLocal()
    try:
        yield db_session
    finally:
        db_session.close()


@pytest.fixture()
def organisation(session: Session) -> Organisation:
    organisation = Organisation(name="Cabinet Alpha", city="Casablanca")
    session.add(organisation)
    session.commit()
    session.refresh(organisation)
    return organisation


@pytest.fixture()
def other_organisation(session: Session) -> Organisation:
    organisation = Organisation(name="Cabinet Beta", city="Rabat")
    session.add(organisation)
    session.commit()
    session.refresh(organisation)
    return organisation


@pytest.fixture()
def scoped_client(session: Session) -> Callable[..., ScopedClient]:
    """Build a scoped client for an organisation and role."""

    def _build(organisation_id: int | None, role: UserRole | None = UserRole.ADMIN, **kwargs) -> ScopedClient:
        return ScopedClient(session, TenantContext(organisation_id=organisation_id, role=role), **kwargs)

    return _build


@pytest.fixture()
def login(session: Session) -> Callable[..., dict[str, str]]:
    """Create a staff user with a live session and return bearer headers."""

    counter = iter(range(1, 1000))

    def _login(organisation: Organisation | None, role: UserRole | None = UserRole.ADMIN) -> dict[str, str]:
        user = User(
            organisation_id=organisation.id if organisation is not None else None,
            email=f"staff{next(counter)}@example.test",
            name="Staff",
            role=role,
        )
        session.add(user)
        session.flush()
        token = issue_session(session, user).token
        session.commit()
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture()
def client(session: Session, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    from clinic import main

    monkeypatch.setattr(main, "_run_migrations", lambda: None)
    application = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        try:
            yield session
        finally:
            session.rollback()

    application.dependency_overrides[get_db_session] = override_get_db_session

    with TestClient(application) as test_client:
        yield test_client

    application.dependency_overrides.clear()
