"""Tests for environment-driven backend settings."""
import pytest
from pydantic import ValidationError

from app.config import get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_environment_overrides_defaults(fresh_settings, monkeypatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRES_MINUTES", "15")

    settings = fresh_settings()

    assert settings.secret_key == "from-env"
    assert settings.access_token_expires_minutes == 15
    assert fresh_settings() is settings


def test_defaults_when_unset(fresh_settings, monkeypatch) -> None:
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRES_MINUTES", raising=False)
    assert fresh_settings().access_token_expires_minutes == 60 * 24


def test_non_positive_expiry_rejected(fresh_settings, monkeypatch) -> None:
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRES_MINUTES", "0")
    with pytest.raises(ValidationError):
        fresh_settings()
