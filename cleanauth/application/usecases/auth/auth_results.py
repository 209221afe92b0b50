"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Auth Use Case Results

Business Goal:
    Modelos compartidos de resultados y errores para login, refresh y logout,
    con códigos estables que la capa HTTP traduce en un único lugar
    (interfaces/api/http/error_mapping.py).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    auth_results models (module)

Responsibilities:
    - Definir AuthErrorCode.
    - Representar AuthError (code + message).
    - Representar AuthResult (par de tokens) y LogoutResult.

Collaborators:
    - domain.entities.AuthTokens
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import AuthTokens


class AuthErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input vacío (ej. refresh token en blanco) -> 400
      - INVALID_CREDENTIALS: email desconocido o password incorrecto -> 401
      - ACCOUNT_INACTIVE: credenciales correctas pero cuenta desactivada -> 401
      - UNAUTHORIZED: refresh token inválido, expirado o ya rotado -> 401
      - NOT_FOUND: el usuario del token ya no existe -> 404
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


@dataclass
class AuthResult:
    """
    Contrato:
      - error is None => tokens presente
      - error != None => tokens None
    """

    tokens: AuthTokens | None = None
    error: AuthError | None = None


@dataclass
class LogoutResult:
    logged_out: bool = False
    error: AuthError | None = None
