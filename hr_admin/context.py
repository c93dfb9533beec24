"""
===============================================================================
TARJETA CRC — hr_admin/context.py (Contexto de correlación por request)
===============================================================================

Responsabilidades:
  - Guardar los datos de correlación del request en curso (request_id,
    method, path) en un ContextVar, aislado por task de asyncio.
  - set_request_context() / get_context_dict() / clear_context().

Colaboradores:
  - crosscutting.middleware: setea el contexto al inicio del request.
  - crosscutting.logger: lo agrega a cada línea de log.

Restricciones:
  - La identidad del usuario NO vive acá: viaja como argumento explícito
    (identity.principal.Identity) desde el Gate hasta los casos de uso.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from types import MappingProxyType
from typing import Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})

_request_context: ContextVar[Mapping[str, str]] = ContextVar(
    "hr_admin_request_context", default=_EMPTY
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Reemplaza el contexto actual; valores vacíos se omiten."""
    values = {"request_id": request_id, "method": method, "path": path}
    _request_context.set(MappingProxyType({k: v for k, v in values.items() if v}))


def get_context_dict() -> dict[str, str]:
    return dict(_request_context.get())


def clear_context() -> None:
    _request_context.set(_EMPTY)
