from .auth_results import AuthError, AuthErrorCode, AuthResult, LogoutResult
from .login import LoginInput, LoginUseCase
from .logout import LogoutUseCase
from .refresh_token import RefreshTokenInput, RefreshTokenUseCase

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "AuthResult",
    "LoginInput",
    "LoginUseCase",
    "LogoutResult",
    "LogoutUseCase",
    "RefreshTokenInput",
    "RefreshTokenUseCase",
]
