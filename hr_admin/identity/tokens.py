"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Credential Codec (JWT de acceso)

Responsabilidades:
    - Emitir un JWT compacto firmado (HS256) con claims
      {sub, email, role, iss, iat, exp}.
    - Verificar firma, issuer y expiración; devolver los claims de identidad.
    - Fallar SIEMPRE con InvalidCredentialError (nunca filtra la causa exacta
      al caller: expirado / firma / issuer / claims faltantes se tratan igual).

Colaboradores:
    - PyJWT (jwt.encode / jwt.decode)
    - identity/gate.py: traduce InvalidCredentialError -> UnauthorizedError.
    - identity/auth_users.py: emite el token al hacer login.

Decisiones de diseño:
    - Hoja del grafo de dependencias: no importa config ni logger; secret,
      issuer y TTL se inyectan al construir (inmutables por proceso).
    - Sin lista de revocación: la expiración es el único límite de vida.
      Un token comprometido sigue válido hasta expirar (limitación documentada).
    - clock inyectable para poder emitir tokens "en el pasado" en tests.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_ROLE: str = "role"
CLAIM_ISS: str = "iss"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

_REQUIRED_CLAIMS = [CLAIM_SUB, CLAIM_EMAIL, CLAIM_ROLE, CLAIM_ISS, CLAIM_IAT, CLAIM_EXP]


class InvalidCredentialError(Exception):
    """El token no pudo verificarse (firma, issuer, expiración o forma)."""


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Claims de identidad que viajan dentro del token."""

    subject: str
    email: str
    role: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Emite y verifica access tokens firmados con un secreto compartido."""

    def __init__(
        self,
        *,
        secret: str,
        issuer: str,
        ttl_seconds: int,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("TokenCodec requires a signing secret")
        if ttl_seconds <= 0:
            raise ValueError("TokenCodec requires a positive ttl_seconds")
        self._secret = secret
        self._issuer = issuer
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, claims: TokenClaims) -> str:
        """Firma los claims con iss/iat/exp de la configuración."""
        now = self._clock()
        payload: dict[str, object] = {
            CLAIM_SUB: claims.subject,
            CLAIM_EMAIL: claims.email,
            CLAIM_ROLE: claims.role,
            CLAIM_ISS: self._issuer,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + timedelta(seconds=self._ttl_seconds)).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verifica el token y devuelve sus claims de identidad.

        Errores:
            InvalidCredentialError si la firma no coincide, el issuer difiere,
            el token expiró o faltan claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                issuer=self._issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidCredentialError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidCredentialError("Token invalid") from exc

        subject = payload.get(CLAIM_SUB)
        email = payload.get(CLAIM_EMAIL)
        role = payload.get(CLAIM_ROLE)
        if not subject or not email or not role:
            raise InvalidCredentialError("Token invalid")

        return TokenClaims(subject=str(subject), email=str(email), role=str(role))
