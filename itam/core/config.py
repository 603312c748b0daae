"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. DATABASE_URL is validated at load time when the SQL
record store is selected.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except database_url, which is
    required when database_backend is 'sql'.
    """

    # App
    app_name: str = "itam-authz"
    app_version: str = "1.0.0"
    debug: bool = False

    # Record store: "memory" (in-process, bootstrap/tests) or "sql" (SQLAlchemy async)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    # Create tables from ORM metadata on startup (sql backend only)
    database_create_schema: bool = True

    # RBAC
    seed_on_startup: bool = True
    authz_audit_enabled: bool = True
    # Field names read from the operation target for scoped checks
    scope_branch_field: str = "branch_id"
    scope_enterprise_field: str = "enterprise_id"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_database_backend(self) -> "Settings":
        """Validate the record store selection.

        - sql: DATABASE_URL required (e.g. postgresql+asyncpg://... or sqlite+aiosqlite://...).
        - memory: nothing required; data lives for the process lifetime.
        """
        if self.database_backend == "sql":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'sql'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'memory' or 'sql', got: {self.database_backend!r}"
            )
        if not self.scope_branch_field or not self.scope_enterprise_field:
            raise ValueError("scope_branch_field and scope_enterprise_field must be non-empty")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
