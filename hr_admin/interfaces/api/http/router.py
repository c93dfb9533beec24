"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por bounded context (departments / employees).

Patrones aplicados:
  - Feature-based modular routing.
  - Factory: build_router() para testear composición sin side-effects.

Notas:
  - Este router se incluye desde hr_admin/api/main.py con prefix=API_PREFIX.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.departments import router as departments_router
from .routers.employees import router as employees_router


def build_router() -> APIRouter:
    """Construye el router raíz versionado."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(departments_router)
    api_router.include_router(employees_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
