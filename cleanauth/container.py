"""
===============================================================================
TARJETA CRC — cleanauth/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorio, cache, hasher, tokens, email) siguiendo DIP.
  - Exponer factories para FastAPI (Depends) y para el lifespan.
  - Mantener singletons con caching (lru_cache).
  - Centralizar decisiones runtime basadas en Settings.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.* (puertos)
  - infrastructure.* / identity.* (implementaciones)
  - application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - Tests: reset_container() limpia todos los singletons.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateUserUseCase,
    DeactivateUserUseCase,
    GetUserByIdUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    UpdateUserProfileUseCase,
)
from .crosscutting.config import get_settings
from .domain.cache import CachePort
from .domain.repositories import UserRepository
from .domain.services import EmailService, PasswordHasher
from .identity.passwords import Argon2PasswordHasher
from .identity.tokens import TokenIssuer
from .infrastructure.cache import build_cache
from .infrastructure.email import EmailOutbox, build_email_service
from .infrastructure.repositories import (
    InMemoryUserRepository,
    PostgresUserRepository,
)
from .worker.email_dispatcher import EmailDispatcher

# =============================================================================
# Helpers internos
# =============================================================================


def uses_in_memory_store() -> bool:
    """
    Regla:
      - app_env ∈ {"test", "testing", "ci"} o sin DATABASE_URL => in-memory.
    """
    settings = get_settings()
    env = settings.app_env.strip().lower()
    return env in {"test", "testing", "ci"} or not settings.database_url


# =============================================================================
# Infraestructura (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Store de usuarios (in-memory en test/dev sin DB; Postgres en runtime)."""
    if uses_in_memory_store():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_cache() -> CachePort:
    """Backend de cache elegido una sola vez (ver build_cache)."""
    return build_cache(get_settings())


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Settings de JWT leídos una sola vez."""
    return TokenIssuer(get_settings().to_jwt_settings())


@lru_cache(maxsize=1)
def get_email_outbox() -> EmailOutbox:
    return EmailOutbox()


@lru_cache(maxsize=1)
def get_email_service() -> EmailService:
    return build_email_service(get_settings())


@lru_cache(maxsize=1)
def get_email_dispatcher() -> EmailDispatcher:
    return EmailDispatcher(
        get_email_outbox(),
        get_email_service(),
        interval_seconds=get_settings().email_dispatch_interval_seconds,
    )


# =============================================================================
# Casos de uso (factories)
# =============================================================================


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(
        repository=get_user_repository(),
        hasher=get_password_hasher(),
        tokens=get_token_issuer(),
    )


def get_refresh_token_use_case() -> RefreshTokenUseCase:
    return RefreshTokenUseCase(
        repository=get_user_repository(),
        tokens=get_token_issuer(),
    )


def get_logout_use_case() -> LogoutUseCase:
    return LogoutUseCase(repository=get_user_repository())


def get_get_user_use_case() -> GetUserByIdUseCase:
    return GetUserByIdUseCase(
        repository=get_user_repository(),
        cache=get_cache(),
        ttl_seconds=get_settings().user_cache_ttl_seconds,
    )


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(
        repository=get_user_repository(),
        hasher=get_password_hasher(),
        outbox=get_email_outbox(),
    )


def get_update_user_profile_use_case() -> UpdateUserProfileUseCase:
    return UpdateUserProfileUseCase(repository=get_user_repository())


def get_deactivate_user_use_case() -> DeactivateUserUseCase:
    return DeactivateUserUseCase(repository=get_user_repository())


def reset_container() -> None:
    """Limpia singletons (tests)."""
    for factory in (
        get_user_repository,
        get_cache,
        get_password_hasher,
        get_token_issuer,
        get_email_outbox,
        get_email_service,
        get_email_dispatcher,
    ):
        factory.cache_clear()
