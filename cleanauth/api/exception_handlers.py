"""
===============================================================================
TARJETA CRC — cleanauth/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones (dominio, validación, infraestructura) al cuerpo
    de error estándar {message, code, errors?, timestamp}.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Tabla:
  - RequestValidationError -> 400 VALIDATION_ERROR (errores por campo)
  - DomainError -> 400 (code propio) / NotFoundError -> 404
  - DatabaseError -> 503 / ServiceError -> 500
  - HTTPException (404 de ruta, 405, ...) -> status propio
  - Exception -> 500 "An unexpected error occurred" (stack solo en logs)

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, error_response
  - crosscutting.exceptions: ServiceError / DatabaseError
  - domain.errors: DomainError / NotFoundError
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.error_responses import (
    UNEXPECTED_ERROR_MESSAGE,
    AppHTTPException,
    ErrorCode,
    FieldErrors,
    app_exception_handler,
    error_response,
)
from ..crosscutting.exceptions import DatabaseError, ServiceError
from ..crosscutting.logger import logger
from ..domain.errors import DomainError, NotFoundError

_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _field_errors(exc: RequestValidationError) -> FieldErrors:
    """loc ("body", "firstName") -> {"firstName": [msg]}"""
    errors: FieldErrors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        errors.setdefault(field, []).append(str(err.get("msg", "Invalid value")))
    return errors


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        400,
        code=ErrorCode.VALIDATION_ERROR.value,
        message="One or more validation errors occurred",
        errors=_field_errors(exc),
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info("Error de dominio", extra={"code": exc.code})
    return error_response(400, code=exc.code, message=exc.message)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(404, code=exc.code, message=exc.message)


async def _handle_service_error(
    request: Request,
    *,
    exc: ServiceError,
    code: ErrorCode,
    status_code: int,
    message: str,
) -> JSONResponse:
    """Helper común para errores tipados de infraestructura."""
    logger.error(
        "Error de servicio",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "detail": exc.message,
            "request_id": _request_id_from(request),
        },
    )
    return error_response(status_code, code=code.value, message=message)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.DATABASE_ERROR,
        status_code=503,
        message="The data store is temporarily unavailable",
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return await _handle_service_error(
        request,
        exc=exc,
        code=ErrorCode.INTERNAL_ERROR,
        status_code=500,
        message=UNEXPECTED_ERROR_MESSAGE,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404 de ruta inexistente, 405, etc. con el mismo formato."""
    code = _STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    if exc.status_code < 500 and exc.status_code not in _STATUS_CODES:
        code = ErrorCode.VALIDATION_ERROR
    return error_response(
        exc.status_code,
        code=code.value,
        message=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (nunca filtra internos).
    """
    logger.error(
        "Excepción no controlada",
        exc_info=exc,
        extra={"request_id": _request_id_from(request)},
    )
    return error_response(
        500, code=ErrorCode.INTERNAL_ERROR.value, message=UNEXPECTED_ERROR_MESSAGE
    )


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - Starlette resuelve por MRO: la subclase más específica gana.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
