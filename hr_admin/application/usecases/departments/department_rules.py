"""
===============================================================================
TARJETA CRC — application/usecases/departments/department_rules.py
===============================================================================

Módulo:
    Reglas de campo + errores canónicos de Department

Responsabilidades:
    - Normalizar name (strip) y description (strip, vacío -> None).
    - Validar name: requerido, <= 100 caracteres.
    - Construir NotFound / Conflict con mensajes estables.

Notas:
    - La unicidad del nombre es exacta y case-sensitive (post-strip).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import ConflictError, NotFoundError, ValidationCollector

NAME_MAX_LENGTH = 100

FIELD_NAME = "name"
FIELD_DESCRIPTION = "description"
UPDATABLE_FIELDS = frozenset({FIELD_NAME, FIELD_DESCRIPTION})


def normalize_name(raw: str | None) -> str:
    return (raw or "").strip()


def normalize_description(raw: str | None) -> str | None:
    if raw is None:
        return None
    return raw.strip() or None


def check_name(errors: ValidationCollector, name: str) -> None:
    if not name:
        errors.add(FIELD_NAME, "Department name is required")
    elif len(name) > NAME_MAX_LENGTH:
        errors.add(
            FIELD_NAME,
            f"Department name must not exceed {NAME_MAX_LENGTH} characters",
        )


def department_not_found(department_id: UUID | str) -> NotFoundError:
    return NotFoundError(
        f"Department with id {department_id} not found",
        details={"department_id": str(department_id)},
    )


def department_name_conflict(name: str) -> ConflictError:
    return ConflictError(
        f'Department with name "{name}" already exists',
        details={FIELD_NAME: name},
    )
