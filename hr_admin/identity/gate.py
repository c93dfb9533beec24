"""
===============================================================================
TARJETA CRC — identity/gate.py
===============================================================================

Módulo:
    Gate de autenticación / autorización (Bearer JWT)

Responsabilidades:
    - authenticate: extraer `Authorization: Bearer <token>` y verificarlo
      con el TokenCodec. Ausente / malformado / inválido -> UnauthorizedError.
    - authorize: exigir identidad presente y rol dentro del set permitido.
    - Exponer dependencias FastAPI (require_identity / require_roles) que
      devuelven un Identity explícito para pasarlo a los casos de uso.

Colaboradores:
    - identity/tokens.TokenCodec
    - identity/users.UserRole
    - container.get_token_codec (DI)
    - crosscutting/exceptions.UnauthorizedError

Notas:
    - La identidad NO se guarda en estado ambiente (request.state / contextvars):
      viaja como argumento Gate -> router -> caso de uso.
    - Rol insuficiente también es 401 (contrato del cliente existente).
===============================================================================
"""

from __future__ import annotations

from typing import Callable, Iterable
from uuid import UUID

from fastapi import Depends, Header

from ..container import get_token_codec
from ..crosscutting.exceptions import UnauthorizedError
from .principal import Identity
from .tokens import InvalidCredentialError, TokenCodec
from .users import UserRole

MSG_NO_TOKEN = "No token provided"
MSG_INVALID_TOKEN = "Invalid or expired token"
MSG_AUTH_REQUIRED = "Authentication required"
MSG_INSUFFICIENT = "Insufficient permissions"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0] != "Bearer":
        return None
    token = parts[1].strip()
    return token or None


def authenticate(authorization: str | None, codec: TokenCodec) -> Identity:
    token = extract_bearer_token(authorization)
    if token is None:
        raise UnauthorizedError(MSG_NO_TOKEN)

    try:
        claims = codec.verify(token)
        return Identity(
            user_id=UUID(claims.subject),
            email=claims.email,
            role=UserRole(claims.role),
        )
    except (InvalidCredentialError, ValueError) as exc:
        # ValueError: sub no es UUID o rol desconocido
        raise UnauthorizedError(MSG_INVALID_TOKEN) from exc


def authorize(identity: Identity | None, allowed_roles: Iterable[UserRole]) -> Identity:
    if identity is None:
        raise UnauthorizedError(MSG_AUTH_REQUIRED)
    if identity.role not in set(allowed_roles):
        raise UnauthorizedError(MSG_INSUFFICIENT)
    return identity


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_identity() -> Callable:
    """Dependency FastAPI: requiere un token Bearer válido."""

    async def dependency(
        authorization: str | None = Header(None, alias="Authorization"),
        codec: TokenCodec = Depends(get_token_codec),
    ) -> Identity:
        return authenticate(authorization, codec)

    return dependency


def require_roles(*roles: UserRole) -> Callable:
    """Dependency FastAPI: autentica y exige alguno de los roles dados."""
    allowed = frozenset(roles)

    async def dependency(
        identity: Identity = Depends(require_identity()),
    ) -> Identity:
        return authorize(identity, allowed)

    return dependency


def require_admin() -> Callable:
    return require_roles(UserRole.ADMIN)
