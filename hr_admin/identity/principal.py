"""
===============================================================================
TARJETA CRC — identity/principal.py
===============================================================================

Módulo:
    Identity (valor explícito del caller autenticado)

Responsabilidades:
    - Transportar {user_id, email, role} desde el Gate hasta los casos de uso
      como argumento (nunca como estado global / request.state).

Colaboradores:
    - identity/gate.py (lo construye a partir de los claims del token)
    - application/usecases/* (lo reciben en execute(...) para auditar en logs)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .users import UserRole


@dataclass(frozen=True, slots=True)
class Identity:
    """Identidad autenticada del caller (derivada del token)."""

    user_id: UUID
    email: str
    role: UserRole

    @property
    def actor_id(self) -> str:
        return str(self.user_id)
