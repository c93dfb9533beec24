"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/employees.py
============================================================
Class: InMemoryEmployeeRepository

Responsibilities:
  - Almacenar empleados en memoria (tests / local dev).
  - Enforzar unicidad de email entre activos (DuplicateKeyError).
  - Soportar clear_department (borrado de departamento sin cascada).

Collaborators:
  - domain.entities.Employee
  - domain.repositories.EmployeeRepository, DuplicateKeyError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Ordering: created_at DESC (empates: última inserción primero).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from ....domain.entities import Employee
from ....domain.repositories import DuplicateKeyError, EmployeeRepository

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


class InMemoryEmployeeRepository(EmployeeRepository):
    """Repositorio in-memory, thread-safe, para Employees."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._employees: Dict[UUID, Employee] = {}

    @staticmethod
    def _now() -> datetime:
        """R: Fuente única de tiempo (UTC)."""
        return datetime.now(timezone.utc)

    @staticmethod
    def _sort_key(e: Employee) -> float:
        created = e.created_at or datetime.min.replace(tzinfo=timezone.utc)
        return -created.timestamp()

    def _active(self) -> List[Employee]:
        return [e for e in self._employees.values() if not e.is_deleted]

    def _email_taken(self, email: str, *, exclude_id: UUID | None = None) -> bool:
        return any(e.email == email and e.id != exclude_id for e in self._active())

    def _snapshot(self, predicate) -> List[Employee]:
        with self._lock:
            items = [replace(e) for e in reversed(self._active()) if predicate(e)]
        return sorted(items, key=self._sort_key)

    # =========================================================
    # Lecturas
    # =========================================================
    async def find_all(self) -> List[Employee]:
        return self._snapshot(lambda e: True)

    async def find_by_id(self, employee_id: UUID) -> Optional[Employee]:
        with self._lock:
            e = self._employees.get(employee_id)
            return replace(e) if e is not None and not e.is_deleted else None

    async def find_by_email(self, email: str) -> Optional[Employee]:
        with self._lock:
            for e in self._active():
                if e.email == email:
                    return replace(e)
        return None

    async def find_by_department_id(self, department_id: UUID) -> List[Employee]:
        return self._snapshot(lambda e: e.department_id == department_id)

    async def count_by_department_id(self, department_id: UUID) -> int:
        with self._lock:
            return sum(1 for e in self._active() if e.department_id == department_id)

    # =========================================================
    # Escrituras
    # =========================================================
    async def create(self, employee: Employee) -> Employee:
        with self._lock:
            if self._email_taken(employee.email):
                raise DuplicateKeyError("employees.email")
            now = self._now()
            stored = replace(
                employee,
                created_at=employee.created_at or now,
                updated_at=employee.updated_at or now,
            )
            self._employees[stored.id] = stored
            return replace(stored)

    async def update_by_id(
        self, employee_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Employee]:
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Non-updatable employee fields: {sorted(unknown)}")

        with self._lock:
            current = self._employees.get(employee_id)
            if current is None or current.is_deleted:
                return None
            if "email" in changes and self._email_taken(
                changes["email"], exclude_id=employee_id
            ):
                raise DuplicateKeyError("employees.email")
            updated = replace(current, **dict(changes), updated_at=self._now())
            self._employees[employee_id] = updated
            return replace(updated)

    async def soft_delete_by_id(self, employee_id: UUID) -> bool:
        with self._lock:
            current = self._employees.get(employee_id)
            if current is None or current.is_deleted:
                return False
            now = self._now()
            self._employees[employee_id] = replace(
                current, deleted_at=now, updated_at=now
            )
            return True

    async def clear_department(self, department_id: UUID) -> int:
        """R: Incluye filas soft-deleted (igual que el UPDATE de Postgres)."""
        with self._lock:
            now = self._now()
            cleared = 0
            for eid, e in list(self._employees.items()):
                if e.department_id == department_id:
                    self._employees[eid] = replace(e, department_id=None, updated_at=now)
                    cleared += 1
            return cleared
