"""
Name: Settings Validation Tests

Responsibilities:
  - Fail fast on missing/weak JWT secret and low hash cost
  - Parse JWT_EXPIRES_IN into seconds
  - Require DATABASE_URL for the postgres backend
"""

import pytest
from pydantic import ValidationError

from hr_admin.crosscutting.config import Settings, get_settings

pytestmark = pytest.mark.unit

STRONG_SECRET = "s" * 32


def _settings(**overrides) -> Settings:
    values = dict(jwt_secret=STRONG_SECRET)
    values.update(overrides)
    return Settings(**values)


def test_defaults_from_test_environment():
    settings = get_settings()

    assert settings.app_env == "test"
    assert settings.store_backend == "memory"
    assert settings.jwt_issuer == "hr-admin-api"
    assert settings.api_prefix == "/api/v1"


def test_missing_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings()


def test_short_secret_fails():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        _settings(jwt_secret="too-short")


def test_hash_cost_below_minimum_fails():
    with pytest.raises(ValidationError, match="PASSWORD_HASH_COST"):
        _settings(password_hash_cost=9)


def test_hash_memory_below_minimum_fails():
    with pytest.raises(ValidationError, match="PASSWORD_HASH_MEMORY_KIB"):
        _settings(password_hash_memory_kib=8)


@pytest.mark.parametrize(
    "expires_in, seconds",
    [("30s", 30), ("15m", 900), ("1h", 3600), ("2d", 172800)],
)
def test_expires_in_is_parsed(expires_in, seconds):
    assert _settings(jwt_expires_in=expires_in).jwt_access_ttl_seconds == seconds


@pytest.mark.parametrize("expires_in", ["", "1", "1w", "h1", "0h", "-1h"])
def test_invalid_expires_in_fails(expires_in):
    with pytest.raises(ValidationError):
        _settings(jwt_expires_in=expires_in)


def test_postgres_backend_requires_database_url():
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        _settings(store_backend="postgres", database_url="")

    settings = _settings(
        store_backend="postgres", database_url="postgresql://u:p@localhost/hr"
    )
    assert settings.store_backend == "postgres"


def test_unknown_environment_fails():
    with pytest.raises(ValidationError):
        _settings(app_env="staging")


def test_allowed_origins_are_split():
    settings = _settings(allowed_origins=" http://a.test , ,http://b.test")
    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


def test_environment_helpers():
    assert _settings(app_env="production").is_production()
    assert _settings(app_env="Development").is_development()
