"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py
===============================================================================

Componente:
    RequestContextMiddleware

Responsabilidades:
    - Aceptar un X-Request-Id entrante (si es seguro) o generar uno nuevo.
    - Exponer la correlación en request.state y en hr_admin/context.py.
    - Registrar una línea por request: status y duración.

Colaboradores:
    - hr_admin/context.py
    - crosscutting/logger.py
    - crosscutting/error_responses.py (lee request.state.request_id)
===============================================================================
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"

# Solo caracteres imprimibles seguros; evita inyectar basura en logs/headers.
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")
_UNLOGGED_PATHS = frozenset({"/health"})


def resolve_request_id(incoming: str | None) -> str:
    candidate = (incoming or "").strip()
    if _REQUEST_ID_RE.match(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            if request.url.path not in _UNLOGGED_PATHS:
                logger.info(
                    "HTTP request handled",
                    extra={
                        "status_code": status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
            clear_context()
