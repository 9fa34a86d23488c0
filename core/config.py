"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for IdeaBoard happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  Frozen settings: the Settings object is immutable once built. The app
      lifespan stores it on app.state.settings and the token/cookie helpers
      receive it as an argument, so no component reaches for a global.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. secret_key -> SECRET_KEY). Type coercion and validation are built in.

Secret key policy:
  An unset SECRET_KEY falls back to a built-in development key and logs a
  warning. An explicitly configured key shorter than 32 chars is rejected.

Layer rule: core/ is the kernel. This module may not import from api/,
auth/, or projects/.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("ideaboard.config")

_DEFAULT_DB_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'ideaboard.db'}"

# Used only when SECRET_KEY is not configured. Never rely on it in production.
_DEV_SECRET_KEY = "ideaboard-development-secret-key-change-me"

# Seven days -- token lifetime and session cookie max_age stay in lockstep.
_SESSION_SECONDS = 7 * 24 * 60 * 60


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    database_url: str = _DEFAULT_DB_URL

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # JWT_SECRET is accepted for compatibility with existing deployments.
    secret_key: str = Field(
        default="",
        validate_default=True,
        validation_alias=AliasChoices("secret_key", "jwt_secret"),
    )
    secure_cookies: bool = False
    token_expire_seconds: int = _SESSION_SECONDS

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    http_host: str = "127.0.0.1"
    http_port: int = 3000
    cors_origins: list[str] = ["http://localhost:3000"]
    allowed_hosts: list[str] = ["*"]

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    login_rate_limit: str = "10/minute"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Fall back to the development key when unset; reject short keys."""
        if not value:
            logger.warning(
                "WARNING: SECRET_KEY is not set; using the built-in development key. "
                "Set SECRET_KEY in your environment or .env file for production."
            )
            return _DEV_SECRET_KEY
        if len(value) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
