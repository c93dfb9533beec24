"""
===============================================================================
TARJETA CRC — hr_admin/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir la taxonomía (AppError) a respuestas HTTP RFC7807.
  - Traducir errores de forma del request (RequestValidationError) a 400,
    enumerando TODOS los campos inválidos.
  - Traducir 404/405 de Starlette al mismo contrato.
  - Centralizar logging: operacionales -> WARNING, inesperados -> ERROR + stack.
  - Evitar filtrar detalles internos fuera de desarrollo.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: app_error_response, problem_response, ErrorCode
  - crosscutting.exceptions: AppError, InternalError
  - crosscutting.config.get_settings (nivel de detalle)
===============================================================================
"""

from __future__ import annotations

import traceback
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    ErrorCode,
    app_error_response,
    problem_response,
)
from ..crosscutting.exceptions import AppError, InternalError, InvalidInputError
from ..crosscutting.logger import logger

_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _is_development() -> bool:
    try:
        return get_settings().is_development()
    except ValidationError:
        # Settings inválidos: nunca exponer detalle
        return False


def _debug_payload(exc: BaseException | None) -> dict[str, Any] | None:
    if exc is None or not _is_development():
        return None
    return {
        "exception": type(exc).__name__,
        "message": str(exc),
        "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log_extra = {
        "error_code": exc.error_code,
        "error_id": exc.error_id,
        "request_id": _request_id_from(request),
    }
    if exc.is_operational:
        logger.warning(exc.message, extra=log_extra)
        debug = None
    else:
        cause = exc.original_error or exc
        logger.error(
            exc.message,
            exc_info=(type(cause), cause, cause.__traceback__),
            extra=log_extra,
        )
        debug = _debug_payload(cause)

    return app_error_response(request, exc, debug=debug)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_PARTS and len(parts) > 1:
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "body"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Errores de forma (tipos / campos faltantes) -> Invalid (400)."""
    violations: dict[str, list[str]] = {}
    for error in exc.errors():
        field = _field_name(tuple(error.get("loc", ())))
        violations.setdefault(field, []).append(str(error.get("msg", "Invalid value")))

    if not violations:
        violations = {"body": ["Invalid request"]}

    return await app_error_handler(request, InvalidInputError.from_violations(violations))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404 de ruta inexistente, 405, etc. con el mismo contrato RFC7807."""
    status_code = exc.status_code
    if status_code == 404:
        code = ErrorCode.NOT_FOUND
        detail = f"Route {request.method} {request.url.path} not found"
    elif status_code == 405:
        code = ErrorCode.METHOD_NOT_ALLOWED
        detail = "Method not allowed"
    elif status_code == 401:
        code = ErrorCode.UNAUTHORIZED
        detail = str(exc.detail)
    elif status_code >= 500:
        code = ErrorCode.INTERNAL_ERROR
        detail = "Internal server error"
    else:
        code = ErrorCode.VALIDATION_ERROR
        detail = str(exc.detail)

    return problem_response(
        request,
        status_code=status_code,
        code=code,
        detail=detail,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler de último recurso para excepciones no tipadas.
    - Log completo (stacktrace) con error_id.
    - Respuesta genérica; en desarrollo agrega `debug`.
    """
    internal = InternalError(original_error=exc)
    return await app_error_handler(request, internal)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
