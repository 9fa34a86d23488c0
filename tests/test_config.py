"""
tests/test_config.py -- Settings defaults and secret key policy.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import Settings


def test_defaults() -> None:
    settings = Settings(secret_key="x" * 32)
    assert settings.token_expire_seconds == 7 * 24 * 60 * 60
    assert settings.login_rate_limit == "10/minute"
    assert settings.rate_limit_enabled is True
    assert settings.rate_limit_storage_uri == "memory://"
    assert settings.http_port == 3000


def test_unset_secret_falls_back_to_development_key(monkeypatch) -> None:
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("JWT_SECRET", raising=False)
    settings = Settings(_env_file=None)
    assert len(settings.secret_key) >= 32


def test_jwt_secret_env_alias(monkeypatch) -> None:
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.setenv("JWT_SECRET", "j" * 40)
    assert Settings(_env_file=None).secret_key == "j" * 40


def test_short_secret_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(secret_key="too-short")


def test_settings_are_immutable() -> None:
    settings = Settings(secret_key="x" * 32)
    with pytest.raises(ValidationError):
        settings.secret_key = "y" * 32


def test_rate_limit_switch_from_env(monkeypatch) -> None:
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    monkeypatch.setenv("RATE_LIMIT_STORAGE_URI", "redis://cache:6379/0")
    settings = Settings(_env_file=None, secret_key="x" * 32)
    assert settings.rate_limit_enabled is False
    assert settings.rate_limit_storage_uri == "redis://cache:6379/0"
