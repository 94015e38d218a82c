"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by an environment variable or .env entry
    - get_settings() is cached (lru_cache): single instance per process
    - backend_url never ends with "/" (paths are appended verbatim)

Design Decisions:
    - Defaults match a local development backend on port 3000
    - Route names live here, not in the manager: the host application owns routing
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Identity backend
    backend_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 30.0

    @field_validator("backend_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Token storage
    database_url: str = "sqlite+aiosqlite:///./authsession.db"
    auto_create_schema: bool = True
    token_key: str = "token"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_sqlite_driver(cls, v: str) -> str:
        """Plain sqlite:// URLs need the aiosqlite driver for the async engine."""
        if isinstance(v, str) and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    # Navigation targets
    post_login_route: str = "/profile"
    post_register_route: str = "/success"
    post_logout_route: str = "/"

    # Restore keeps the token on transport failure unless this is set
    clear_token_on_restore_failure: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
