"""Application settings and environment loading utilities."""
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_FILE)


class Settings(BaseSettings):
    """Central application configuration."""

    app_name: str = Field(default="Clinic Practice API", alias="APP_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    database_url: str = Field(
        default="sqlite:///./data/dev.db",
        description="SQLAlchemy database URL",
        alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    tenant_scope_strict: bool = Field(
        default=False,
        description="Reject scoped operations from contexts lacking an organisation",
        alias="TENANT_SCOPE_STRICT",
    )
    require_organisation: bool = Field(
        default=True,
        description="Refuse authenticated HTTP callers without an organisation",
        alias="REQUIRE_ORGANISATION",
    )
    default_page_size: int = Field(default=10, ge=1, le=500, alias="DEFAULT_PAGE_SIZE")

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> "Settings":
    """Return cached settings instance."""

    return Settings()
