"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/users.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios (credential holders) en memoria.
  - Enforzar unicidad de email (DuplicateKeyError).
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.repositories import DuplicateKeyError, UserRepository
from ....identity.users import User


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    async def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
        return None

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    async def create(self, user: User) -> User:
        # User es frozen: se puede compartir sin copia.
        with self._lock:
            if any(u.email == user.email for u in self._users.values()):
                raise DuplicateKeyError("users.email")
            self._users[user.id] = user
            return user
