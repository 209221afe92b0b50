"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (JWT_*, in-memory store, log email backend)
  - Provide reusable fixtures (clock, hasher, token issuer, repositories)
  - Reset singletons between tests (settings cache + container)

Collaborators:
  - pytest / pytest-asyncio
  - cleanauth.container: reset_container()
  - cleanauth.crosscutting.config: Settings / get_settings

Notes:
  - Env vars are set BEFORE importing cleanauth (Settings fail-fast on JWT_*)
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("JWT_ISSUER", "cleanauth-tests")
os.environ.setdefault("JWT_AUDIENCE", "cleanauth-clients")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("EMAIL_BACKEND", "log")
os.environ.setdefault("LOG_JSON", "true")

from argon2 import PasswordHasher as Argon2Hasher  # noqa: E402

from cleanauth.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from cleanauth.container import reset_container  # noqa: E402
from cleanauth.identity.passwords import Argon2PasswordHasher  # noqa: E402
from cleanauth.identity.tokens import JwtSettings, TokenIssuer  # noqa: E402
from cleanauth.infrastructure.repositories import InMemoryUserRepository  # noqa: E402

TEST_JWT_SETTINGS = JwtSettings(
    secret=os.environ["JWT_SECRET"],
    issuer=os.environ["JWT_ISSUER"],
    audience=os.environ["JWT_AUDIENCE"],
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


class FakeClock:
    """Reloj controlable para tests de expiración (sin sleeps)."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# ============================================================================
# Singletons
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Each test gets fresh settings and container singletons."""
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Identity fixtures
# ============================================================================


@pytest.fixture(scope="session")
def password_hasher() -> Argon2PasswordHasher:
    """R: Low-cost Argon2 parameters keep the suite fast."""
    return Argon2PasswordHasher(
        Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1)
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_issuer(clock: FakeClock) -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SETTINGS, clock=clock)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def jwt_settings() -> JwtSettings:
    return TEST_JWT_SETTINGS
