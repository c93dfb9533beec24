"""
===============================================================================
USE CASE: Create Department
===============================================================================

Business Goal:
    Crear un departamento con nombre único entre los departamentos activos.

Invariantes:
    * name requerido, <= 100 caracteres (post-strip)
    * no existe otro departamento activo con el mismo name (exacto)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateDepartmentUseCase

Responsibilities:
    - Validar campos (todas las violaciones juntas).
    - Chequear unicidad (fast-path) antes de escribir.
    - Traducir DuplicateKeyError del store -> Conflict (backstop ante carreras).

Collaborators:
    - DepartmentRepository: find_by_name, create
    - department_rules
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from ....crosscutting.exceptions import ValidationCollector
from ....crosscutting.logger import logger
from ....domain.entities import Department
from ....domain.repositories import DepartmentRepository
from ....identity.principal import Identity
from .._store import store_guard
from .department_rules import (
    check_name,
    department_name_conflict,
    normalize_description,
    normalize_name,
)


@dataclass(frozen=True)
class CreateDepartmentInput:
    name: str
    description: str | None = None


class CreateDepartmentUseCase:
    def __init__(self, department_repository: DepartmentRepository) -> None:
        self._departments = department_repository

    async def execute(
        self, identity: Identity, input_data: CreateDepartmentInput
    ) -> Department:
        # ---------------------------------------------------------------------
        # 1) Normalizar y validar campos.
        # ---------------------------------------------------------------------
        name = normalize_name(input_data.name)
        errors = ValidationCollector()
        check_name(errors, name)
        errors.raise_if_any()

        # ---------------------------------------------------------------------
        # 2) Unicidad (fast-path; el store la garantiza con índice único).
        # ---------------------------------------------------------------------
        with store_guard("department lookup"):
            existing = await self._departments.find_by_name(name)
        if existing is not None:
            raise department_name_conflict(name)

        # ---------------------------------------------------------------------
        # 3) Persistir.
        # ---------------------------------------------------------------------
        now = datetime.now(timezone.utc)
        department = Department(
            id=uuid4(),
            name=name,
            description=normalize_description(input_data.description),
            created_at=now,
            updated_at=now,
        )
        with store_guard(
            "department create",
            on_duplicate=lambda _exc: department_name_conflict(name),
        ):
            created = await self._departments.create(department)

        logger.info(
            "Department created",
            extra={"department_id": str(created.id), "actor_id": identity.actor_id},
        )
        return created
