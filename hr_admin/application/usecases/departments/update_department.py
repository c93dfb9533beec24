"""
===============================================================================
USE CASE: Update Department (merge parcial)
===============================================================================

Business Goal:
    Actualizar solo los campos presentes en el patch (name / description).

Invariantes:
    * campo ausente -> no se toca; Present(None) en description -> se limpia
    * name presente: requerido, <= 100 caracteres
    * name distinto del actual -> debe ser único (excluyendo el propio registro)
    * patch vacío -> devuelve el registro actual sin escribir

Collaborators:
    - DepartmentRepository: find_by_id, find_by_name, update_by_id
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict
from uuid import UUID

from ....crosscutting.exceptions import ValidationCollector
from ....crosscutting.logger import logger
from ....domain.entities import Department
from ....domain.patch import Patch, unknown_fields
from ....domain.repositories import DepartmentRepository
from ....identity.principal import Identity
from .._store import store_guard
from .department_rules import (
    FIELD_DESCRIPTION,
    FIELD_NAME,
    UPDATABLE_FIELDS,
    check_name,
    department_name_conflict,
    department_not_found,
    normalize_description,
    normalize_name,
)


class UpdateDepartmentUseCase:
    def __init__(self, department_repository: DepartmentRepository) -> None:
        self._departments = department_repository

    async def execute(
        self, identity: Identity, department_id: UUID, patch: Patch
    ) -> Department:
        # ---------------------------------------------------------------------
        # 1) Validar campos presentes.
        # ---------------------------------------------------------------------
        errors = ValidationCollector()
        for field_name in unknown_fields(patch, UPDATABLE_FIELDS):
            errors.add(field_name, f"Unknown field: {field_name}")

        changes: Dict[str, Any] = {}
        if FIELD_NAME in patch:
            name = normalize_name(patch[FIELD_NAME].value)
            check_name(errors, name)
            changes[FIELD_NAME] = name
        if FIELD_DESCRIPTION in patch:
            changes[FIELD_DESCRIPTION] = normalize_description(
                patch[FIELD_DESCRIPTION].value
            )
        errors.raise_if_any()

        # ---------------------------------------------------------------------
        # 2) Cargar registro actual.
        # ---------------------------------------------------------------------
        with store_guard("department lookup"):
            current = await self._departments.find_by_id(department_id)
        if current is None or current.is_deleted:
            raise department_not_found(department_id)

        if not changes:
            return current

        # ---------------------------------------------------------------------
        # 3) Unicidad solo si el nombre realmente cambia.
        # ---------------------------------------------------------------------
        new_name = changes.get(FIELD_NAME)
        if new_name is not None and new_name != current.name:
            with store_guard("department lookup"):
                existing = await self._departments.find_by_name(new_name)
            if existing is not None and existing.id != department_id:
                raise department_name_conflict(new_name)

        # ---------------------------------------------------------------------
        # 4) Persistir merge.
        # ---------------------------------------------------------------------
        with store_guard(
            "department update",
            on_duplicate=lambda _exc: department_name_conflict(str(new_name)),
        ):
            updated = await self._departments.update_by_id(department_id, changes)

        if updated is None:
            # Race: borrado entre lectura y escritura.
            raise department_not_found(department_id)

        logger.info(
            "Department updated",
            extra={
                "department_id": str(department_id),
                "fields": sorted(changes),
                "actor_id": identity.actor_id,
            },
        )
        return updated
