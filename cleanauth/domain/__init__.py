"""Domain layer: entities, ports and business errors."""

from .entities import (
    AccessTokenClaims,
    AuthTokens,
    EntityStamp,
    User,
    UserReadModel,
    UserRole,
    utcnow,
)
from .errors import (
    DomainError,
    EmailAlreadyExistsError,
    InvalidPasswordInput,
    NotFoundError,
)

__all__ = [
    "AccessTokenClaims",
    "AuthTokens",
    "DomainError",
    "EmailAlreadyExistsError",
    "EntityStamp",
    "InvalidPasswordInput",
    "NotFoundError",
    "User",
    "UserReadModel",
    "UserRole",
    "utcnow",
]
