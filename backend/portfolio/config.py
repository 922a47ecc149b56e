"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting overridable from environment or .env
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for everything: works out-of-the-box with a local SQLite file
    - Admin credential defaults are for local development; override them in production
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/portfolio.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_tables: bool = True

    # Admin session
    admin_email: str = "test@example.com"
    admin_password: str = "password123"
    session_cookie_name: str = "session_token"
    session_cookie_secure: bool = False
    session_ttl_seconds: int | None = None

    # Site
    site_root: str = str(PACKAGE_DIR / "static")
    site_title: str = "Portfolio"
    contact_lines: list[str] = [
        "Email- hello@example.com",
        "X- @example",
        "Github- example",
    ]

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
