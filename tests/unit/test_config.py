"""
Name: Settings Tests

Responsibilities:
  - Fail fast when JWT_* are missing or blank
  - Validate TTLs, backends and production hardening rules
"""

import pytest
from pydantic import ValidationError

from cleanauth.crosscutting.config import Settings

pytestmark = pytest.mark.unit

JWT = dict(jwt_secret="s" * 32, jwt_issuer="iss", jwt_audience="aud")


def _settings(**overrides) -> Settings:
    return Settings(**{**JWT, **overrides})


def test_defaults():
    settings = _settings(cache_backend="", email_backend="log")

    assert settings.jwt_access_ttl_minutes == 15
    assert settings.refresh_token_ttl_days == 7
    assert settings.user_cache_ttl_seconds == 900


def test_missing_jwt_secret_fails(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(jwt_issuer="iss", jwt_audience="aud")


@pytest.mark.parametrize("field", ["jwt_secret", "jwt_issuer", "jwt_audience"])
def test_blank_jwt_values_fail(field):
    with pytest.raises(ValidationError):
        _settings(**{field: "   "})


@pytest.mark.parametrize(
    "field",
    ["jwt_access_ttl_minutes", "refresh_token_ttl_days", "user_cache_ttl_seconds"],
)
def test_non_positive_ttls_fail(field):
    with pytest.raises(ValidationError):
        _settings(**{field: 0})


def test_unknown_cache_backend_fails():
    with pytest.raises(ValidationError):
        _settings(cache_backend="memcached")


def test_smtp_requires_host():
    with pytest.raises(ValidationError):
        _settings(email_backend="smtp", smtp_host="")


def test_production_rejects_short_secret():
    with pytest.raises(ValidationError):
        _settings(app_env="production", jwt_secret="short-secret")


def test_production_rejects_default_secret():
    with pytest.raises(ValidationError):
        _settings(app_env="production", jwt_secret="changeme")


def test_allowed_origins_list():
    settings = _settings(allowed_origins="http://a.com, http://b.com,")

    assert settings.get_allowed_origins_list() == ["http://a.com", "http://b.com"]


def test_jwt_settings_snapshot():
    jwt_settings = _settings(jwt_access_ttl_minutes=5).to_jwt_settings()

    assert jwt_settings.secret == "s" * 32
    assert jwt_settings.issuer == "iss"
    assert jwt_settings.audience == "aud"
    assert jwt_settings.access_ttl_minutes == 5
    assert jwt_settings.algorithm == "HS256"
