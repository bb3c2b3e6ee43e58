from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import os

def _coerce_async_url(url: str) -> str:
    """Convert common Postgres URLs to asyncpg DSN for SQLAlchemy."""
    if not url:
        return url
    # Heroku provides postgres:// or postgresql://
    if url.startswith("postgres://"):
        return "postgresql+asyncpg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    # plain sqlite:/// paths need the async driver too
    if url.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + url[len("sqlite://"):]
    return url


class Settings(BaseSettings):
    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None  # also write logs here when set

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------
    # Optional here to allow Heroku-style DATABASE_URL fallback.
    DB_URL: Optional[str] = None  # resolved at runtime if missing

    # ------------------------------------------------------------------
    # Workspace
    # ------------------------------------------------------------------
    # Unset -> the first workspace row found is used.
    WORKSPACE_ID: Optional[str] = None

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    # Legacy exports are not CSV-escaped; turn this on for RFC 4180 quoting.
    CSV_QUOTE_VALUES: bool = False

    # ------------------------------------------------------------------
    # Deployment / hosting
    # ------------------------------------------------------------------
    HOST: str = "0.0.0.0"
    PORT: int = 4040
    RUN_DDL_ON_START: bool = True   # run create_all on startup (disable in prod)
    SEED_ON_START: bool = False     # load the reference workspace into an empty store

    # ------------------------------------------------------------------
    # Model configuration
    # ------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # ignore any unrecognized vars instead of erroring
    )


DEFAULT_DB_URL = "sqlite+aiosqlite:///./opportunities.db"

# create global settings instance and normalize DB URL
settings = Settings()

# Fallback: allow DATABASE_URL, then the local sqlite file
if not settings.DB_URL:
    settings.DB_URL = os.getenv("DATABASE_URL", "") or DEFAULT_DB_URL

settings.DB_URL = _coerce_async_url(settings.DB_URL)
