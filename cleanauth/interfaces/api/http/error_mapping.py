"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Tabla:
  - VALIDATION_ERROR / EMAIL_EXISTS -> 400
  - INVALID_CREDENTIALS / ACCOUNT_INACTIVE / UNAUTHORIZED -> 401
  - FORBIDDEN -> 403
  - NOT_FOUND -> 404

Colaboradores:
  - application.usecases (AuthErrorCode, UserErrorCode)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ....application.usecases import AuthError, AuthErrorCode, UserError, UserErrorCode
from ....crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    forbidden,
    internal_error,
    not_found,
    validation_error,
)


def raise_auth_error(error: AuthError) -> NoReturn:
    if error.code == AuthErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)

    if error.code in (
        AuthErrorCode.INVALID_CREDENTIALS,
        AuthErrorCode.ACCOUNT_INACTIVE,
        AuthErrorCode.UNAUTHORIZED,
    ):
        raise AppHTTPException(
            401,
            error.code.value,
            error.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    if error.code == AuthErrorCode.NOT_FOUND:
        raise not_found(error.message)

    # Código no mapeado
    raise internal_error()


def raise_user_error(error: UserError) -> NoReturn:
    if error.code == UserErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, error.errors)

    if error.code == UserErrorCode.EMAIL_EXISTS:
        raise AppHTTPException(400, ErrorCode.EMAIL_EXISTS, error.message)

    if error.code == UserErrorCode.FORBIDDEN:
        raise forbidden(error.message)

    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found(error.message)

    raise internal_error()
