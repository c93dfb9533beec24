# hr_admin/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Objetivo
--------
Uniformar TODOS los errores HTTP para que:
- El frontend pueda manejar por "code"
- El backend pueda correlacionar por request_id / error_id
- La taxonomía (crosscutting/exceptions.py) se traduzca SIEMPRE igual:

    INVALID -> 400 | UNAUTHORIZED -> 401 | NOT_FOUND -> 404
    CONFLICT -> 409 | INTERNAL -> 500

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorDetail + problem_response()

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload RFC7807 (ErrorDetail)
  - Mapear ErrorKind -> status HTTP (contrato con los clientes)

Colaboradores:
  - crosscutting/exceptions.py (AppError, ErrorKind)
  - api/exception_handlers.py (logging + registro de handlers)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .exceptions import AppError, ErrorKind


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

GENERIC_INTERNAL_DETAIL = "Ocurrió un error inesperado"


class ErrorDetail(BaseModel):
    """
    Modelo RFC 7807 (Problem Details).

    Campos extra:
    - code: error code estable para clientes
    - errors: lista opcional de detalles (ej: [{"field":"salary","messages":[...]}])
    - debug: solo en desarrollo (tipo de excepción + stacktrace)
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None
    debug: dict[str, Any] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _openapi_error(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: _openapi_error("Bad Request"),
    401: _openapi_error("Unauthorized"),
    404: _openapi_error("Not Found"),
    409: _openapi_error("Conflict"),
    500: _openapi_error("Internal Server Error"),
}


def details_to_errors(details: dict[str, Any] | None) -> list[dict[str, Any]]:
    """
    Aplana details de la taxonomía a la lista `errors` de RFC7807.

    {"salary": ["a", "b"]} -> [{"field": "salary", "messages": ["a", "b"]}]
    Valores no-lista se exponen tal cual ({"field": k, "value": v}).
    """
    errors: list[dict[str, Any]] = []
    for key, value in (details or {}).items():
        if isinstance(value, list):
            errors.append({"field": key, "messages": [str(m) for m in value]})
        else:
            errors.append({"field": key, "value": value})
    return errors


def problem_response(
    request: Request,
    *,
    status_code: int,
    code: ErrorCode,
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    debug: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Construye la respuesta problem+json (incluye request_id si existe)."""
    request_id = getattr(getattr(request, "state", None), "request_id", None)

    all_errors = list(errors or [])
    if request_id:
        all_errors.append({"request_id": request_id})

    error = ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=code.value.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        code=code,
        instance=str(request.url),
        errors=all_errors or None,
        debug=debug,
    )
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(mode="json", exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


def app_error_response(
    request: Request,
    exc: AppError,
    *,
    debug: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Traduce un AppError a RFC7807.

    - INTERNAL nunca expone el mensaje original.
    - UNAUTHORIZED agrega WWW-Authenticate: Bearer.
    """
    status_code = HTTP_STATUS_BY_KIND[exc.kind]
    detail = exc.message
    if exc.kind == ErrorKind.INTERNAL:
        detail = GENERIC_INTERNAL_DETAIL

    errors = details_to_errors(exc.details) if exc.kind != ErrorKind.INTERNAL else []
    errors.append({"error_id": exc.error_id})

    headers = (
        {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.UNAUTHORIZED else None
    )
    return problem_response(
        request,
        status_code=status_code,
        code=ErrorCode(exc.error_code),
        detail=detail,
        errors=errors,
        debug=debug,
        headers=headers,
    )
