"""Engine, session factory and schema bootstrap for the clinic store."""
from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from clinic.db import Base, models  # noqa: F401  # registers every mapped table on Base.metadata

from .settings import Settings, get_settings


def engine_options(database_url: str) -> dict[str, Any]:
    """Keyword arguments for :func:`create_engine` suited to ``database_url``."""

    options: dict[str, Any] = {"future": True}
    if database_url.startswith("sqlite"):
        # Request sessions are handed across FastAPI's worker threads.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


def build_engine(settings: Settings) -> Engine:
    return create_engine(settings.database_url, **engine_options(settings.database_url))


ENGINE = build_engine(get_settings())
SessionLocal = sessionmaker(bind=ENGINE, class_=Session, autoflush=False, autocommit=False)


def get_db_session() -> Generator[Session, None, None]:
    """Request-scoped session; closed once the response is sent."""

    with SessionLocal() as session:
        yield session


def create_database_schema(engine: Engine = ENGINE) -> None:
    """Create any missing tables straight from ORM metadata."""

    Base.metadata.create_all(bind=engine)
