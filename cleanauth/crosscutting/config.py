"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup (fail-fast on missing JWT config)
  - Build the immutable JwtSettings snapshot handed to the TokenIssuer

Collaborators:
  - api/main.py: reads settings in lifespan (pool, cache, email dispatcher)
  - container.py: reads settings to pick repository/cache/email backends
  - identity/tokens.py: receives JwtSettings (never reads Settings directly)

Constraints:
  - Lives in crosscutting layer, NOT in domain/application
  - No business logic, only configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache; tests call get_settings.cache_clear()
  - jwt_secret / jwt_issuer / jwt_audience have no defaults on purpose:
    a process without them must not start
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from ..identity.tokens import JwtSettings

_CACHE_BACKENDS = {"", "memory", "redis", "none"}
_EMAIL_BACKENDS = {"log", "smtp"}
_INSECURE_SECRETS = {"dev-secret", "changeme", "change-me", "password", "secret"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        jwt_secret: Symmetric key for HS256 access tokens (required)
        jwt_issuer: Expected/emitted `iss` claim (required)
        jwt_audience: Expected/emitted `aud` claim (required)
        jwt_access_ttl_minutes: Access token TTL (default: 15)
        refresh_token_ttl_days: Refresh token lifetime (default: 7)
        app_env: development | test | production
        database_url: PostgreSQL connection string; empty => in-memory store
        redis_url: Redis connection string; empty => caching disabled
        cache_backend: "" (auto) | memory | redis | none
        user_cache_ttl_seconds: TTL of the `user:{id}` read-model entry (default: 900)
        email_backend: log | smtp
        email_dispatch_interval_seconds: Poll interval of the email dispatcher
        log_level / log_json: logger configuration
        allowed_origins: Comma-separated CORS origins
    """

    # Required (no defaults)
    jwt_secret: str
    jwt_issuer: str
    jwt_audience: str

    # Security - JWT
    jwt_access_ttl_minutes: int = 15
    refresh_token_ttl_days: int = 7

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Database
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 5000

    # Cache
    redis_url: str = ""
    cache_backend: str = ""
    user_cache_ttl_seconds: int = 15 * 60

    # Email
    email_backend: str = "log"
    email_dispatch_interval_seconds: float = 5.0
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_sender: str = "no-reply@localhost"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("jwt_access_ttl_minutes", "refresh_token_ttl_days")
    @classmethod
    def ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("token TTLs must be greater than 0")
        return v

    @field_validator("user_cache_ttl_seconds")
    @classmethod
    def cache_ttl_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("user_cache_ttl_seconds must be greater than 0")
        return v

    @field_validator("email_dispatch_interval_seconds")
    @classmethod
    def interval_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("email_dispatch_interval_seconds must be greater than 0")
        return v

    @field_validator("cache_backend")
    @classmethod
    def cache_backend_valid(cls, v: str) -> str:
        backend = (v or "").strip().lower()
        if backend not in _CACHE_BACKENDS:
            raise ValueError("cache_backend must be memory, redis, none or empty")
        return backend

    @field_validator("email_backend")
    @classmethod
    def email_backend_valid(cls, v: str) -> str:
        backend = (v or "log").strip().lower()
        if backend not in _EMAIL_BACKENDS:
            raise ValueError("email_backend must be log or smtp")
        return backend

    @field_validator("jwt_secret", "jwt_issuer", "jwt_audience")
    @classmethod
    def jwt_values_not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("JWT_SECRET, JWT_ISSUER and JWT_AUDIENCE must be set")
        return v.strip()

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if self.email_backend == "smtp" and not self.smtp_host:
            raise ValueError("SMTP_HOST is required when EMAIL_BACKEND=smtp")
        if not self.is_production():
            return self

        if self.jwt_secret in _INSECURE_SECRETS:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def to_jwt_settings(self) -> "JwtSettings":
        """Snapshot inmutable para el TokenIssuer (se construye una sola vez)."""
        # Import local: identity.tokens importa el logger, que lee Settings.
        from ..identity.tokens import JwtSettings

        return JwtSettings(
            secret=self.jwt_secret,
            issuer=self.jwt_issuer,
            audience=self.jwt_audience,
            access_ttl_minutes=self.jwt_access_ttl_minutes,
            refresh_ttl_days=self.refresh_token_ttl_days,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
