"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/employees.py
============================================================
Class: PostgresEmployeeRepository

Responsibilities:
  - Implementar EmployeeRepository sobre la tabla `employees`.
  - Soft delete vía deleted_at; toda lectura filtra deleted_at IS NULL.
  - Unicidad de email por índice único parcial (uq_employees_email_active).
  - clear_department: desasigna empleados de un departamento borrado.

Collaborators:
  - psycopg_pool.AsyncConnectionPool
  - domain.entities.Employee, EmployeeStatus
============================================================
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from ....domain.entities import Employee, EmployeeStatus
from ....domain.repositories import EmployeeRepository, StoreError
from ._sql import default_pool, execute, fetchall, fetchone, update_statement

_COLUMNS = (
    "id, first_name, last_name, email, phone, position, salary, hire_date, "
    "status, department_id, created_at, updated_at, deleted_at"
)
_ORDER_BY = "created_at DESC, id DESC"
_MUTABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "email",
        "phone",
        "position",
        "salary",
        "hire_date",
        "status",
        "department_id",
    }
)


def _row_to_employee(row: tuple) -> Employee:
    try:
        status = EmployeeStatus(row[8])
    except ValueError as exc:
        raise StoreError(f"Invalid employee status in database: {row[8]}") from exc

    return Employee(
        id=row[0],
        first_name=row[1],
        last_name=row[2],
        email=row[3],
        phone=row[4],
        position=row[5],
        salary=row[6],
        hire_date=row[7],
        status=status,
        department_id=row[9],
        created_at=row[10],
        updated_at=row[11],
        deleted_at=row[12],
    )


def _db_value(value: Any) -> Any:
    # Enums se guardan por valor (columna text)
    return value.value if isinstance(value, EmployeeStatus) else value


class PostgresEmployeeRepository(EmployeeRepository):
    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self._pool_override = pool

    @property
    def _pool(self) -> AsyncConnectionPool:
        return self._pool_override or default_pool()

    async def find_all(self) -> List[Employee]:
        rows = await fetchall(
            self._pool,
            f"SELECT {_COLUMNS} FROM employees "
            f"WHERE deleted_at IS NULL ORDER BY {_ORDER_BY}",
            operation="employees.find_all",
        )
        return [_row_to_employee(r) for r in rows]

    async def find_by_id(self, employee_id: UUID) -> Optional[Employee]:
        row = await fetchone(
            self._pool,
            f"SELECT {_COLUMNS} FROM employees WHERE id = %s AND deleted_at IS NULL",
            (employee_id,),
            operation="employees.find_by_id",
        )
        return _row_to_employee(row) if row else None

    async def find_by_email(self, email: str) -> Optional[Employee]:
        row = await fetchone(
            self._pool,
            f"SELECT {_COLUMNS} FROM employees WHERE email = %s AND deleted_at IS NULL",
            (email,),
            operation="employees.find_by_email",
        )
        return _row_to_employee(row) if row else None

    async def find_by_department_id(self, department_id: UUID) -> List[Employee]:
        rows = await fetchall(
            self._pool,
            f"SELECT {_COLUMNS} FROM employees "
            f"WHERE department_id = %s AND deleted_at IS NULL ORDER BY {_ORDER_BY}",
            (department_id,),
            operation="employees.find_by_department_id",
        )
        return [_row_to_employee(r) for r in rows]

    async def count_by_department_id(self, department_id: UUID) -> int:
        row = await fetchone(
            self._pool,
            "SELECT COUNT(*) FROM employees "
            "WHERE department_id = %s AND deleted_at IS NULL",
            (department_id,),
            operation="employees.count_by_department_id",
        )
        return int(row[0]) if row else 0

    async def create(self, employee: Employee) -> Employee:
        row = await fetchone(
            self._pool,
            f"""
            INSERT INTO employees (
                id, first_name, last_name, email, phone, position, salary,
                hire_date, status, department_id, created_at, updated_at
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s,
                    COALESCE(%s, now()), COALESCE(%s, now()))
            RETURNING {_COLUMNS}
            """,
            (
                employee.id,
                employee.first_name,
                employee.last_name,
                employee.email,
                employee.phone,
                employee.position,
                employee.salary,
                employee.hire_date,
                employee.status.value,
                employee.department_id,
                employee.created_at,
                employee.updated_at,
            ),
            operation="employees.create",
        )
        return _row_to_employee(row)

    async def update_by_id(
        self, employee_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Employee]:
        query = update_statement("employees", _COLUMNS, changes, _MUTABLE_FIELDS)
        row = await fetchone(
            self._pool,
            query,
            (*(_db_value(v) for v in changes.values()), employee_id),
            operation="employees.update_by_id",
        )
        return _row_to_employee(row) if row else None

    async def soft_delete_by_id(self, employee_id: UUID) -> bool:
        count = await execute(
            self._pool,
            "UPDATE employees SET deleted_at = now(), updated_at = now() "
            "WHERE id = %s AND deleted_at IS NULL",
            (employee_id,),
            operation="employees.soft_delete_by_id",
        )
        return count > 0

    async def clear_department(self, department_id: UUID) -> int:
        return await execute(
            self._pool,
            "UPDATE employees SET department_id = NULL, updated_at = now() "
            "WHERE department_id = %s",
            (department_id,),
            operation="employees.clear_department",
        )
