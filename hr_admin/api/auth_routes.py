"""
===============================================================================
TARJETA CRC — hr_admin/api/auth_routes.py (Autenticación)
===============================================================================

Responsabilidades:
  - POST /auth/login: email + password -> access token (JWT) + usuario.
  - GET /auth/me: identidad del token actual.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> AuthenticationService.
  - Fail-safe security: cualquier falla de credenciales -> 401 idéntico.

Colaboradores:
  - identity.auth_users.AuthenticationService
  - identity.gate.require_identity
  - container.get_authentication_service
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..container import get_authentication_service
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.auth_users import AuthenticationService
from ..identity.gate import require_identity
from ..identity.principal import Identity
from ..identity.users import User, UserRole

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)


class UserResponse(BaseModel):
    id: UUID
    email: str
    role: UserRole
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id, email=user.email, role=user.role, created_at=user.created_at
        )


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class MeResponse(BaseModel):
    user_id: UUID
    email: str
    role: UserRole


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
):
    result = await service.login(req.email, req.password)
    return LoginResponse(
        token=result.token,
        expires_in=result.expires_in,
        user=UserResponse.from_user(result.user),
    )


@router.get("/me", response_model=MeResponse)
async def me(identity: Identity = Depends(require_identity())):
    return MeResponse(user_id=identity.user_id, email=identity.email, role=identity.role)
