"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/users.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios para autenticación (por email / por id).
  - Crear usuarios (solo provisioning / seed).
  - Mapear filas -> User y validar UserRole (valor inválido -> StoreError).
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from psycopg_pool import AsyncConnectionPool

from ....domain.repositories import StoreError, UserRepository
from ....identity.users import User, UserRole
from ._sql import default_pool, fetchone

_COLUMNS = "id, email, password_hash, role, created_at, updated_at"


def _row_to_user(row: tuple) -> User:
    try:
        role = UserRole(row[3])
    except ValueError as exc:
        raise StoreError(f"Invalid user role in database: {row[3]}") from exc

    return User(
        id=row[0],
        email=row[1],
        password_hash=row[2],
        role=role,
        created_at=row[4],
        updated_at=row[5],
    )


class PostgresUserRepository(UserRepository):
    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self._pool_override = pool

    @property
    def _pool(self) -> AsyncConnectionPool:
        return self._pool_override or default_pool()

    async def find_by_email(self, email: str) -> Optional[User]:
        row = await fetchone(
            self._pool,
            f"SELECT {_COLUMNS} FROM users WHERE email = %s",
            (email,),
            operation="users.find_by_email",
        )
        return _row_to_user(row) if row else None

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        row = await fetchone(
            self._pool,
            f"SELECT {_COLUMNS} FROM users WHERE id = %s",
            (user_id,),
            operation="users.find_by_id",
        )
        return _row_to_user(row) if row else None

    async def create(self, user: User) -> User:
        row = await fetchone(
            self._pool,
            f"""
            INSERT INTO users (id, email, password_hash, role, created_at, updated_at)
            VALUES (%s, %s, %s, %s, COALESCE(%s, now()), COALESCE(%s, now()))
            RETURNING {_COLUMNS}
            """,
            (
                user.id,
                user.email,
                user.password_hash,
                user.role.value,
                user.created_at,
                user.updated_at,
            ),
            operation="users.create",
        )
        return _row_to_user(row)
