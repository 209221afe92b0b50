"""
===============================================================================
TARJETA CRC — domain/errors.py
===============================================================================

Módulo:
    Errores de Dominio

Responsabilidades:
    - Señalar violaciones de reglas de negocio con un código estable.
    - Mantenerse libres de HTTP: la traducción a status vive en
      api/exception_handlers.py.

Colaboradores:
    - domain.entities: lanza DomainError al violar invariantes.
    - identity.passwords: InvalidPasswordInput.
    - infrastructure.repositories: EmailAlreadyExistsError.
===============================================================================
"""

from __future__ import annotations


class DomainError(Exception):
    """Violación de una regla de negocio (HTTP 400)."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(DomainError):
    """Recurso inexistente (HTTP 404)."""

    def __init__(self, message: str):
        super().__init__(message, code="NOT_FOUND")


class EmailAlreadyExistsError(DomainError):
    def __init__(self, email: str):
        super().__init__(f"Email {email} is already in use", code="EMAIL_EXISTS")
        self.email = email


class InvalidPasswordInput(DomainError):
    def __init__(self, message: str = "Password must not be empty"):
        super().__init__(message, code="VALIDATION_ERROR")
