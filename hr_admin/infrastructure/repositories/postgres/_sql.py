"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/_sql.py
============================================================
Responsibilities:
  - Ejecutar SQL parametrizado sobre el pool async con manejo de errores
    consistente para todos los repos Postgres.
  - Traducir UniqueViolation -> DuplicateKeyError y cualquier otro error de
    psycopg -> StoreError (con log estructurado para operadores).
  - Construir el SET de un UPDATE parcial a partir de un mapping validado.

Constraints / Notes:
  - SQL parametrizado siempre (nunca interpolar input de usuario).
  - Los nombres de columna del UPDATE salen de una whitelist por tabla.
============================================================
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

import psycopg
from psycopg import sql
from psycopg.errors import UniqueViolation
from psycopg_pool import AsyncConnectionPool

from ....crosscutting.logger import logger
from ....domain.repositories import DuplicateKeyError, StoreError


def default_pool() -> AsyncConnectionPool:
    from ...db.pool import get_pool

    return get_pool()


def _store_failure(operation: str, exc: Exception) -> StoreError:
    if isinstance(exc, UniqueViolation):
        constraint = getattr(exc.diag, "constraint_name", None) or "unique"
        return DuplicateKeyError(constraint)
    logger.exception(
        "Fallo de store", extra={"operation": operation, "error": str(exc)}
    )
    return StoreError(f"{operation}: {exc}")


async def fetchone(
    pool: AsyncConnectionPool,
    query: Any,
    params: Iterable[object] = (),
    *,
    operation: str,
) -> Optional[tuple]:
    """SELECT/UPDATE ... RETURNING con una sola fila (commit al salir)."""
    try:
        async with pool.connection() as conn:
            cur = await conn.execute(query, tuple(params))
            return await cur.fetchone()
    except psycopg.Error as exc:
        raise _store_failure(operation, exc) from exc


async def fetchall(
    pool: AsyncConnectionPool,
    query: Any,
    params: Iterable[object] = (),
    *,
    operation: str,
) -> list[tuple]:
    try:
        async with pool.connection() as conn:
            cur = await conn.execute(query, tuple(params))
            return await cur.fetchall()
    except psycopg.Error as exc:
        raise _store_failure(operation, exc) from exc


async def execute(
    pool: AsyncConnectionPool,
    query: Any,
    params: Iterable[object] = (),
    *,
    operation: str,
) -> int:
    """Ejecuta un write y devuelve rowcount."""
    try:
        async with pool.connection() as conn:
            cur = await conn.execute(query, tuple(params))
            return cur.rowcount
    except psycopg.Error as exc:
        raise _store_failure(operation, exc) from exc


def update_statement(
    table: str,
    columns: str,
    changes: Mapping[str, Any],
    allowed: frozenset[str],
) -> sql.Composed:
    """
    UPDATE <table> SET c1 = %s, ..., updated_at = now()
    WHERE id = %s AND deleted_at IS NULL RETURNING <columns>
    """
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Non-updatable {table} fields: {sorted(unknown)}")

    assignments = [
        sql.SQL("{} = %s").format(sql.Identifier(name)) for name in changes
    ]
    assignments.append(sql.SQL("updated_at = now()"))
    return sql.SQL(
        "UPDATE {table} SET {assignments} "
        "WHERE id = %s AND deleted_at IS NULL RETURNING {columns}"
    ).format(
        table=sql.Identifier(table),
        assignments=sql.SQL(", ").join(assignments),
        columns=sql.SQL(columns),
    )
