"""
===============================================================================
USE CASE: Get Department
===============================================================================

Responsibilities:
    - Resolver un departamento activo por id (NotFound si no existe o está
      soft-deleted).

Collaborators:
    - DepartmentRepository.find_by_id
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.entities import Department
from ....domain.repositories import DepartmentRepository
from ....identity.principal import Identity
from .._store import store_guard
from .department_rules import department_not_found


class GetDepartmentUseCase:
    def __init__(self, department_repository: DepartmentRepository) -> None:
        self._departments = department_repository

    async def execute(self, identity: Identity, department_id: UUID) -> Department:
        with store_guard("department lookup"):
            department = await self._departments.find_by_id(department_id)

        if department is None or department.is_deleted:
            raise department_not_found(department_id)
        return department
