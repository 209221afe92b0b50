"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    User Use Case Results

Business Goal:
    Modelos compartidos de resultados y errores para los casos de uso de
    usuarios (alta, lectura, edición de perfil, desactivación).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    user_results models (module)

Responsibilities:
    - Definir UserErrorCode.
    - Representar UserError (code + message + errores por campo).
    - Representar UserResult (read model).

Collaborators:
    - domain.entities.UserReadModel
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....domain.entities import UserReadModel


class UserErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos (con detalle por campo)
      - EMAIL_EXISTS: el email ya está registrado
      - FORBIDDEN: el actor no es el dueño ni Admin
      - NOT_FOUND: usuario inexistente
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class UserError:
    """
    Error de caso de uso.

    Campos:
      - code: categoría estable
      - message: descripción humana
      - errors: {campo: [mensajes]} solo para VALIDATION_ERROR
    """

    code: UserErrorCode
    message: str
    errors: dict[str, list[str]] | None = None


@dataclass
class UserResult:
    user: UserReadModel | None = None
    error: UserError | None = None


def user_not_found(user_id) -> UserResult:
    return UserResult(
        error=UserError(
            code=UserErrorCode.NOT_FOUND,
            message=f"User with id {user_id} not found",
        )
    )
