"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/departments.py
============================================================
Class: PostgresDepartmentRepository

Responsibilities:
  - Implementar DepartmentRepository sobre la tabla `departments`.
  - Soft delete vía deleted_at; toda lectura filtra deleted_at IS NULL.
  - Unicidad de name garantizada por índice único parcial
    (uq_departments_name_active) -> DuplicateKeyError.

Collaborators:
  - psycopg_pool.AsyncConnectionPool
  - domain.entities.Department
============================================================
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from ....domain.entities import Department
from ....domain.repositories import DepartmentRepository
from ._sql import default_pool, execute, fetchall, fetchone, update_statement

# R: Contrato de columnas con la migración 001.
_COLUMNS = "id, name, description, created_at, updated_at, deleted_at"
_ORDER_BY = "created_at DESC, id DESC"
_MUTABLE_FIELDS = frozenset({"name", "description"})


def _row_to_department(row: tuple) -> Department:
    return Department(
        id=row[0],
        name=row[1],
        description=row[2],
        created_at=row[3],
        updated_at=row[4],
        deleted_at=row[5],
    )


class PostgresDepartmentRepository(DepartmentRepository):
    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self._pool_override = pool

    @property
    def _pool(self) -> AsyncConnectionPool:
        return self._pool_override or default_pool()

    async def find_all(self) -> List[Department]:
        rows = await fetchall(
            self._pool,
            f"SELECT {_COLUMNS} FROM departments "
            f"WHERE deleted_at IS NULL ORDER BY {_ORDER_BY}",
            operation="departments.find_all",
        )
        return [_row_to_department(r) for r in rows]

    async def find_by_id(self, department_id: UUID) -> Optional[Department]:
        row = await fetchone(
            self._pool,
            f"SELECT {_COLUMNS} FROM departments WHERE id = %s AND deleted_at IS NULL",
            (department_id,),
            operation="departments.find_by_id",
        )
        return _row_to_department(row) if row else None

    async def find_by_name(self, name: str) -> Optional[Department]:
        row = await fetchone(
            self._pool,
            f"SELECT {_COLUMNS} FROM departments WHERE name = %s AND deleted_at IS NULL",
            (name,),
            operation="departments.find_by_name",
        )
        return _row_to_department(row) if row else None

    async def create(self, department: Department) -> Department:
        row = await fetchone(
            self._pool,
            f"""
            INSERT INTO departments (id, name, description, created_at, updated_at)
            VALUES (%s, %s, %s, COALESCE(%s, now()), COALESCE(%s, now()))
            RETURNING {_COLUMNS}
            """,
            (
                department.id,
                department.name,
                department.description,
                department.created_at,
                department.updated_at,
            ),
            operation="departments.create",
        )
        return _row_to_department(row)

    async def update_by_id(
        self, department_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Department]:
        query = update_statement("departments", _COLUMNS, changes, _MUTABLE_FIELDS)
        row = await fetchone(
            self._pool,
            query,
            (*changes.values(), department_id),
            operation="departments.update_by_id",
        )
        return _row_to_department(row) if row else None

    async def soft_delete_by_id(self, department_id: UUID) -> bool:
        count = await execute(
            self._pool,
            "UPDATE departments SET deleted_at = now(), updated_at = now() "
            "WHERE id = %s AND deleted_at IS NULL",
            (department_id,),
            operation="departments.soft_delete_by_id",
        )
        return count > 0
