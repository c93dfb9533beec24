"""
CRC — domain/repositories.py

Name
- Entity Store Contract (Protocols)

Responsibilities
- Define persistence contracts for departments, employees and users (ports).
- Keep the application layer independent from infrastructure (PostgreSQL, in-memory).
- Define the store-level errors every adapter raises (StoreError, DuplicateKeyError).

Collaborators
- domain.entities: Department, Employee
- identity.users: User
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- Every read excludes soft-deleted rows; lists are ordered by created_at DESC.
- Unique keys (department name, employee email, user email) MUST be enforced by
  the store itself; a rejected write raises DuplicateKeyError.

Notes
- Async contract: adapters may await network I/O (psycopg) or not (in-memory).
- update_by_id receives already-validated column values (plain mapping).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Protocol
from uuid import UUID

from ..crosscutting.exceptions import InternalError
from .entities import Department, Employee

if TYPE_CHECKING:
    from ..identity.users import User


class StoreError(Exception):
    """R: Any failure of the underlying store (connection, timeout, SQL)."""


class DuplicateKeyError(StoreError):
    """R: The store rejected a write that violates a unique key."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"duplicate value for unique key '{key}'")


def wrap_store_error(exc: StoreError, operation: str) -> InternalError:
    """R: Store failure -> Internal (cause kept for operator logs only)."""
    return InternalError(f"Store failure during {operation}", original_error=exc)


class DepartmentRepository(Protocol):
    """R: Persistence contract for departments."""

    async def find_all(self) -> List[Department]: ...

    async def find_by_id(self, department_id: UUID) -> Optional[Department]: ...

    async def find_by_name(self, name: str) -> Optional[Department]:
        """R: Exact (case-sensitive) match among non-deleted departments."""
        ...

    async def create(self, department: Department) -> Department: ...

    async def update_by_id(
        self, department_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Department]:
        """R: Merge `changes` and bump updated_at. None if absent/deleted."""
        ...

    async def soft_delete_by_id(self, department_id: UUID) -> bool:
        """R: Mark deleted. False if absent or already deleted."""
        ...


class EmployeeRepository(Protocol):
    """R: Persistence contract for employees."""

    async def find_all(self) -> List[Employee]: ...

    async def find_by_id(self, employee_id: UUID) -> Optional[Employee]: ...

    async def find_by_email(self, email: str) -> Optional[Employee]: ...

    async def find_by_department_id(self, department_id: UUID) -> List[Employee]: ...

    async def create(self, employee: Employee) -> Employee: ...

    async def update_by_id(
        self, employee_id: UUID, changes: Mapping[str, Any]
    ) -> Optional[Employee]: ...

    async def soft_delete_by_id(self, employee_id: UUID) -> bool: ...

    async def count_by_department_id(self, department_id: UUID) -> int: ...

    async def clear_department(self, department_id: UUID) -> int:
        """R: Set department_id = NULL on every employee referencing it."""
        ...


class UserRepository(Protocol):
    """R: Read-mostly contract for credential holders."""

    async def find_by_email(self, email: str) -> Optional["User"]: ...

    async def find_by_id(self, user_id: UUID) -> Optional["User"]: ...

    async def create(self, user: "User") -> "User": ...
