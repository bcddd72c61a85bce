"""Application entrypoint and FastAPI factory."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError
from strawberry.fastapi import GraphQLRouter

from clinic.api.errors import tenant_access_error_handler
from clinic.api.router import router as api_router
from clinic.core.database import ENGINE, create_database_schema
from clinic.core.logging import configure_logging
from clinic.core.settings import BASE_DIR, Settings, get_settings
from clinic.core.tenant import TenantAccessError
from clinic.graphql.context import context_getter
from clinic.graphql.schema import schema

logger = logging.getLogger(__name__)

ALEMBIC_INI = BASE_DIR / "alembic.ini"


def _run_migrations() -> None:
    """Execute Alembic migrations; fallback to metadata create_all on failure."""

    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(BASE_DIR / "clinic" / "db" / "migrations"))
    try:
        command.upgrade(config, "head")
    except (CommandError, SQLAlchemyError) as exc:
        logger.warning("Alembic upgrade failed (%s); creating schema from metadata", exc)
        create_database_schema()


def _ensure_sqlite_directory(settings: Settings) -> None:
    """If using SQLite file storage, ensure parent directory exists."""

    url = settings.database_url
    if url.startswith("sqlite") and ":memory:" not in url:
        # sqlite:///./data/dev.db -> ./data/dev.db
        database_path = url.removeprefix("sqlite:///")
        db_file = Path(database_path).expanduser().resolve()
        db_file.parent.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, bring the schema up to date and dispose the engine on shutdown."""

    settings = get_settings()
    configure_logging(settings)
    _ensure_sqlite_directory(settings)
    _run_migrations()
    app.state.settings = settings
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        ENGINE.dispose()


def create_app() -> FastAPI:
    """Application factory used by ASGI servers."""

    settings = get_settings()
    graphql_app = GraphQLRouter(schema, path="/graphql", context_getter=context_getter)

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_exception_handler(TenantAccessError, tenant_access_error_handler)
    application.include_router(api_router, prefix="/api")
    application.include_router(graphql_app, prefix="")

    return application


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("clinic.main:app", host="0.0.0.0", port=8000, reload=True)
