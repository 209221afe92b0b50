# cleanauth/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas de infraestructura (errores internos)
===============================================================================

Objetivo
--------
Excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos ni SQL)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ServiceError + subclases

Responsabilidades:
  - Estandarizar errores de infraestructura que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - infrastructure/db/errors.py
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class ServiceError(Exception):
    """
    Base para errores internos del sistema (DB, cache, email).

    Los errores de negocio NO heredan de acá: ver domain/errors.py.
    """

    error_code: str = "SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(ServiceError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class EmailDeliveryError(ServiceError):
    """El proveedor de email rechazó o no pudo entregar el mensaje."""

    error_code: str = "EMAIL_DELIVERY_ERROR"
