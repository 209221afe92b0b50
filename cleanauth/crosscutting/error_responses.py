# cleanauth/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El cliente pueda manejar por "code"
- Los errores de validación traigan el detalle por campo
- Ningún error filtre detalles internos (stack traces, SQL, etc.)

Formato
-------
  {"message": "...", "code": "...", "errors": {"field": ["msg"]}, "timestamp": "..."}

  - errors solo aparece en fallas de validación.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + handlers

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir el payload (ErrorDetail)
  - Proveer factories de errores frecuentes
  - Proveer handlers (FastAPI) que devuelven JSON

Colaboradores:
  - api/exception_handlers.py (mapea errores de dominio e infraestructura)
  - interfaces/api/http/error_mapping.py (mapea resultados de use cases)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

FieldErrors = dict[str, list[str]]

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorDetail(BaseModel):
    """
    Cuerpo de error.

    Campos:
    - message: texto para humanos
    - code: código estable para clientes (ErrorCode o código de dominio)
    - errors: detalle por campo (solo validación)
    - timestamp: instante UTC en ISO-8601
    """

    message: str
    code: str
    errors: FieldErrors | None = None
    timestamp: str = Field(default_factory=_utc_timestamp)


OPENAPI_ERROR_RESPONSES = {
    "400": {"description": "Bad Request", "model": ErrorDetail},
    "401": {"description": "Unauthorized", "model": ErrorDetail},
    "403": {"description": "Forbidden", "model": ErrorDetail},
    "404": {"description": "Not Found", "model": ErrorDetail},
    "default": {"description": "Error", "model": ErrorDetail},
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppHTTPException

    Responsabilidades:
      - Adjuntar un código estable
      - Transportar errores de validación por campo
      - Permitir headers custom (WWW-Authenticate, Location, etc.)

    Colaboradores:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode | str,
        detail: str,
        errors: FieldErrors | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code.value if isinstance(code, ErrorCode) else str(code)
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories de error (helpers)
# ---------------------------------------------------------------------------
def validation_error(
    detail: str = "One or more validation errors occurred",
    errors: FieldErrors | None = None,
) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def unauthorized(detail: str = "Unauthenticated") -> AppHTTPException:
    return AppHTTPException(
        401,
        ErrorCode.UNAUTHORIZED,
        detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden(detail: str = "Access denied") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = UNEXPECTED_ERROR_MESSAGE) -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
def error_response(
    status_code: int,
    *,
    code: str,
    message: str,
    errors: FieldErrors | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    error = ErrorDetail(message=message, code=code, errors=errors or None)
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
        headers=headers,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException.

    Propaga headers opcionales (WWW-Authenticate, etc.).
    """
    return error_response(
        exc.status_code,
        code=exc.code,
        message=str(exc.detail),
        errors=exc.errors,
        headers=getattr(exc, "headers", None),
    )

