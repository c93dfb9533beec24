# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (provisioning del único rol ADMIN)
===============================================================================

Qué es:
    Asegura que exista un usuario ADMIN para desarrollo/test cuando está
    configurado (DEV_SEED_ADMIN=true). Los usuarios no se crean por la API.

Seguridad:
    - Guard estricto: NUNCA corre en producción (fail-fast).
    - Password requerido: sin default hardcodeado.

Patrones:
    - Fail-fast guard (safety boundary)
    - Idempotencia (si el email ya existe, no hace nada)

CRC:
    Component: ensure_dev_admin
    Collaborators:
      - UserRepository (find_by_email / create)
      - PasswordHasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.auth_users import normalize_email
from ..identity.passwords import PasswordHasher
from ..identity.users import User, UserRole


async def ensure_dev_admin(
    settings: Settings,
    *,
    users: UserRepository,
    hasher: PasswordHasher,
) -> UUID | None:
    """
    Crea el admin de desarrollo si corresponde.

    Returns:
        id del admin (existente o creado) o None si el seed está deshabilitado.
    """
    if not settings.dev_seed_admin:
        return None

    if settings.is_production():
        raise RuntimeError("DEV_SEED_ADMIN cannot be enabled in production")

    email = normalize_email(settings.dev_seed_admin_email)
    password = settings.dev_seed_admin_password
    if not email or not password:
        raise RuntimeError(
            "DEV_SEED_ADMIN requires DEV_SEED_ADMIN_EMAIL and DEV_SEED_ADMIN_PASSWORD"
        )

    existing = await users.find_by_email(email)
    if existing is not None:
        logger.info("Dev seed admin: ya existe", extra={"user_id": str(existing.id)})
        return existing.id

    now = datetime.now(timezone.utc)
    user = await users.create(
        User(
            id=uuid4(),
            email=email,
            password_hash=hasher.hash(password),
            role=UserRole.ADMIN,
            created_at=now,
            updated_at=now,
        )
    )
    logger.info("Dev seed admin: creado", extra={"user_id": str(user.id)})
    return user.id
