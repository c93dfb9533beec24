"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Authentication Service (login por email/password -> JWT)

Responsabilidades:
    - validate_credentials: lookup por email + compare del hash (sin side effects).
    - login: emitir token con {sub, email, role} si las credenciales son válidas.
    - NO distinguir "email desconocido" de "password incorrecto" (anti-enumeración),
      ni en el mensaje ni en el costo: un email desconocido también verifica
      contra un digest descartable.

Colaboradores:
    - domain/repositories.UserRepository (lookup)
    - identity/passwords.PasswordHasher (compare)
    - identity/tokens.TokenCodec (issue)
    - crosscutting/exceptions.UnauthorizedError

Notas:
    - El email se normaliza (trim + lower) igual que al provisionar usuarios.
    - Nunca loguear el password ni el token.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ..crosscutting.exceptions import UnauthorizedError
from ..crosscutting.logger import logger
from ..domain.repositories import StoreError, UserRepository, wrap_store_error
from .passwords import PasswordHasher
from .tokens import TokenClaims, TokenCodec
from .users import User

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@dataclass(frozen=True, slots=True)
class LoginResult:
    token: str
    expires_in: int
    user: User


class AuthenticationService:
    """Valida credenciales y emite access tokens."""

    def __init__(
        self,
        *,
        users: UserRepository,
        hasher: PasswordHasher,
        codec: TokenCodec,
    ) -> None:
        self._users = users
        self._hasher = hasher
        self._codec = codec

    async def validate_credentials(self, email: str, plaintext: str) -> User | None:
        """Devuelve el usuario si email+password coinciden; si no, None."""
        normalized = normalize_email(email)
        if not normalized or not plaintext:
            return None

        try:
            user = await self._users.find_by_email(normalized)
        except StoreError as exc:
            raise wrap_store_error(exc, "user lookup") from exc

        if user is None:
            # Mismo trabajo de Argon2 que un password incorrecto.
            self._hasher.compare(plaintext, self._hasher.dummy_digest)
            return None
        if not self._hasher.compare(plaintext, user.password_hash):
            return None
        return user

    async def login(self, email: str, plaintext: str) -> LoginResult:
        user = await self.validate_credentials(email, plaintext)
        if user is None:
            logger.warning("Login rechazado")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        token = self._codec.issue(
            TokenClaims(subject=str(user.id), email=user.email, role=user.role.value)
        )
        logger.info("Login exitoso", extra={"user_id": str(user.id)})
        return LoginResult(token=token, expires_in=self._codec.ttl_seconds, user=user)
