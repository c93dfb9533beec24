"""
===============================================================================
USE CASE: List Departments
===============================================================================

Responsibilities:
    - Devolver todos los departamentos activos (created_at DESC).

Collaborators:
    - DepartmentRepository.find_all
===============================================================================
"""

from __future__ import annotations

from typing import List

from ....crosscutting.logger import logger
from ....domain.entities import Department
from ....domain.repositories import DepartmentRepository
from ....identity.principal import Identity
from .._store import store_guard


class ListDepartmentsUseCase:
    def __init__(self, department_repository: DepartmentRepository) -> None:
        self._departments = department_repository

    async def execute(self, identity: Identity) -> List[Department]:
        with store_guard("department list"):
            departments = await self._departments.find_all()

        logger.info(
            "Departments listed",
            extra={"count": len(departments), "actor_id": identity.actor_id},
        )
        return departments
