"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (credential holder)

Responsabilidades:
    - Definir el enum de roles de usuario para autenticación/autorización.
    - Definir el dataclass User utilizado por los flujos de auth (login / token).

Colaboradores:
    - identity/auth_users.py: valida credenciales y emite tokens para User.
    - identity/gate.py: compara el rol de los claims contra UserRole.
    - infrastructure/repositories/*/users.py: mapea filas -> User.

Notas:
    - Solo existe ADMIN. Si agregás roles, revisá los require_roles(...) de los routers.
    - User es inmutable: no hay camino de actualización en este backend.
    - password_hash nunca se expone hacia afuera (ver schemas de respuesta).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados para autenticación JWT."""

    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario utilizado por autenticación (JWT)."""

    id: UUID
    email: str
    password_hash: str = field(repr=False)
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None
