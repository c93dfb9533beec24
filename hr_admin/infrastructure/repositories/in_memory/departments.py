"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/departments.py
============================================================
Class: InMemoryDepartmentRepository

Responsibilities:
  - Almacenar departamentos en memoria (tests / local dev).
  - Implementar el contrato DepartmentRepository con soft delete.
  - Enforzar unicidad de name entre activos (DuplicateKeyError), igual que
    el índice único parcial de Postgres.
  - Ordering determinístico alineado con Postgres:
      ORDER BY created_at DESC (empates: última inserción primero)

Collaborators:
  - domain.entities.Department
  - domain.repositories.DepartmentRepository, DuplicateKeyError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Nunca se devuelve la instancia almacenada (copias via replace).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from ....domain.entities import Department
from ....domain.repositories import DepartmentRepository, DuplicateKeyError

_MUTABLE_FIELDS = frozenset({"name", "description"})


class InMemoryDepartmentRepository(DepartmentRepository):
    """
    Repositorio in-memory, thread-safe, para Departments.

    Modelo mental:
    - _departments es la "tabla" en memoria (UUID -> Department).
    - Las filas soft-deleted se conservan pero son invisibles a las lecturas.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._departments: Dict[UUID, Department] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        """R: Fuente única de tiempo (UTC)."""
        return datetime.now(timezone.utc)

    @staticmethod
    def _sort_key(d: Department) -> float:
        created = d.created_at or datetime.min.replace(tzinfo=timezone.utc)
        return -created.timestamp()

    def _active(self) -> List[Department]:
        return [d for d in self._departments.values() if not d.is_deleted]

    def _name_taken(self, name: str, *, exclude_id: UUID | None = None) -> bool:
        return any(d.name == name and d.id != exclude_id for d in self._active())

    # =========================================================
    # Lecturas
    # =========================================================
    async def find_all(self) -> List[Department]:
        with self._lock:
            items = [replace(d) for d in reversed(self._active())]
        # sort estable: a igual created_at, la última inserción primero
        return sorted(items, key=self._sort_key)

    async def find_by_id(self, department_id: UUID) -> Optional[Department]:
        with self._lock:
            d = self._departments.get(department_id)
            return replace(d) if d is not None and not d.is_deleted else None

    async def find_by_name(self, name: str) -> Optional[Department]:
        with self._lock:
            for d in self._active():
                if d.name == name:
                    return replace(d)
        return None

    # =========================================================
    # Escrituras
    # =========================================================
    async def create(self, department: Department) -> Department:
        with self._lock:
            if self._name_taken(department.name):
                raise DuplicateKeyError("departments.name")
            now = self._now()
            stored = replace(
                department,
                created_at=department.created_at or now,
                updated_at=department.updated_at or now,
            )
            self._departments[stored.id] = stored
            return replace(stored)

    async def update_by_id(
        self, department_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Department]:
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Non-updatable department fields: {sorted(unknown)}")

        with self._lock:
            current = self._departments.get(department_id)
            if current is None or current.is_deleted:
                return None
            if "name" in changes and self._name_taken(
                changes["name"], exclude_id=department_id
            ):
                raise DuplicateKeyError("departments.name")
            updated = replace(current, **dict(changes), updated_at=self._now())
            self._departments[department_id] = updated
            return replace(updated)

    async def soft_delete_by_id(self, department_id: UUID) -> bool:
        with self._lock:
            current = self._departments.get(department_id)
            if current is None or current.is_deleted:
                return False
            now = self._now()
            self._departments[department_id] = replace(
                current, deleted_at=now, updated_at=now
            )
            return True
