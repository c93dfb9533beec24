"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount auth + HR routers under API_PREFIX (default /api/v1)
  - Expose health check and service banner

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - interfaces.api.http.router: departments / employees endpoints
  - api.auth_routes: login / me

Notes:
  - Middleware order matters: RequestContext -> CORS -> routes
  - Settings are validated at startup (lifespan), never lazily on first request
  - STORE_BACKEND=postgres opens the async pool in the lifespan
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .. import __version__
from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_password_hasher, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router as hr_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

_STARTED_AT = time.monotonic()
DEFAULT_API_PREFIX = "/api/v1"
DEFAULT_ALLOWED_ORIGINS = ["http://localhost:3000"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and initializes pool."""
    # Fail-fast: JWT_SECRET ausente/corto o PASSWORD_HASH_COST < 10 abortan el arranque
    settings = get_settings()

    uses_postgres = settings.store_backend == "postgres"
    if uses_postgres:
        await init_pool(
            settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        await ensure_dev_admin(
            settings, users=get_user_repository(), hasher=get_password_hasher()
        )
        logger.info(
            "HR Admin API starting up",
            extra={
                "app_env": settings.app_env,
                "store_backend": settings.store_backend,
                "api_prefix": settings.api_prefix,
            },
        )
        yield
    finally:
        if uses_postgres:
            await close_pool()
        logger.info("HR Admin API shutting down")


def _startup_value(getter, fallback):
    # R: A import-time los settings pueden no estar completos (tests, tooling);
    #    la validación real ocurre en el lifespan.
    try:
        return getter(get_settings())
    except ValidationError:
        return fallback


def create_app() -> FastAPI:
    api_prefix = _startup_value(lambda s: s.api_prefix, DEFAULT_API_PREFIX)
    allowed_origins = _startup_value(
        lambda s: s.get_allowed_origins_list(), DEFAULT_ALLOWED_ORIGINS
    )

    fastapi_app = FastAPI(
        title="HR Admin API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "User authentication (JWT)"},
            {"name": "departments", "description": "Department management (ADMIN)"},
            {"name": "employees", "description": "Employee management (ADMIN)"},
            {"name": "health", "description": "Liveness"},
        ],
    )

    register_exception_handlers(fastapi_app)

    # R: Starlette ejecuta el último middleware agregado primero.
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    fastapi_app.add_middleware(RequestContextMiddleware)

    fastapi_app.include_router(auth_router, prefix=api_prefix)
    fastapi_app.include_router(hr_router, prefix=api_prefix)

    @fastapi_app.get("/health", tags=["health"])
    def health():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime_seconds": round(time.monotonic() - _STARTED_AT, 3),
        }

    @fastapi_app.get("/", tags=["health"])
    def root():
        return {
            "name": "HR Admin API",
            "version": __version__,
            "docs": "/docs",
            "api_prefix": api_prefix,
        }

    return fastapi_app


app = create_app()
