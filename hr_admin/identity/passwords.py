"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Password Hasher (Argon2)

Responsabilidades:
    - hash(plaintext, cost) -> digest (one-way, con salt aleatorio).
    - compare(plaintext, digest) -> bool (la comparación la hace argon2-cffi
      en tiempo constante respecto del digest).

Colaboradores:
    - argon2-cffi (argon2.PasswordHasher)
    - identity/auth_users.py: valida credenciales en login.
    - application/dev_seed_admin.py: hashea el password del admin seed.

Notas:
    - cost = time_cost de Argon2 (>= 10 por configuración).
    - Nunca comparar plaintext a mano ni cortar antes por longitud.
    - dummy_digest se calcula una vez por instancia (el container la cachea).
===============================================================================
"""

from __future__ import annotations

import secrets

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

DEFAULT_MEMORY_COST_KIB: int = 65536


class PasswordHasher:
    """Envoltorio mínimo sobre Argon2 con costo configurable."""

    def __init__(self, *, cost: int, memory_cost_kib: int = DEFAULT_MEMORY_COST_KIB):
        self._cost = cost
        self._memory_cost_kib = memory_cost_kib
        self._default = self._hasher_for(cost)
        self._dummy_digest: str | None = None

    @property
    def cost(self) -> int:
        return self._cost

    @property
    def dummy_digest(self) -> str:
        """Digest descartable (mismo costo) para igualar tiempos cuando no hay usuario."""
        if self._dummy_digest is None:
            self._dummy_digest = self._default.hash(secrets.token_urlsafe(16))
        return self._dummy_digest

    def _hasher_for(self, cost: int) -> _Argon2Hasher:
        return _Argon2Hasher(time_cost=cost, memory_cost=self._memory_cost_kib)

    def hash(self, plaintext: str, cost: int | None = None) -> str:
        """Hashea un password (cost=None usa el costo configurado)."""
        hasher = self._default if cost is None or cost == self._cost else self._hasher_for(cost)
        return hasher.hash(plaintext)

    def compare(self, plaintext: str, digest: str) -> bool:
        """Verifica password vs hash almacenado. Nunca lanza por mismatch."""
        try:
            return self._default.verify(digest, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
