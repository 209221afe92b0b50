"""
Use cases (application services).

Cada caso de uso devuelve un resultado tipado (dataclass) con un error de
código estable en lugar de lanzar excepciones hacia la capa HTTP.
"""

from .auth import (
    AuthError,
    AuthErrorCode,
    AuthResult,
    LoginInput,
    LoginUseCase,
    LogoutResult,
    LogoutUseCase,
    RefreshTokenInput,
    RefreshTokenUseCase,
)
from .users import (
    CreateUserInput,
    CreateUserUseCase,
    DeactivateUserInput,
    DeactivateUserUseCase,
    GetUserByIdUseCase,
    UpdateUserProfileInput,
    UpdateUserProfileUseCase,
    UserActor,
    UserError,
    UserErrorCode,
    UserResult,
)

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "AuthResult",
    "CreateUserInput",
    "CreateUserUseCase",
    "DeactivateUserInput",
    "DeactivateUserUseCase",
    "GetUserByIdUseCase",
    "LoginInput",
    "LoginUseCase",
    "LogoutResult",
    "LogoutUseCase",
    "RefreshTokenInput",
    "RefreshTokenUseCase",
    "UpdateUserProfileInput",
    "UpdateUserProfileUseCase",
    "UserActor",
    "UserError",
    "UserErrorCode",
    "UserResult",
]
