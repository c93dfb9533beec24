"""
===============================================================================
USE CASE: Delete Employee (soft delete)
===============================================================================

Invariantes:
    * NotFound si no existe o ya estaba eliminado (no idempotente)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import EmployeeRepository
from ....identity.principal import Identity
from .._store import store_guard
from .employee_rules import employee_not_found


class DeleteEmployeeUseCase:
    def __init__(self, employee_repository: EmployeeRepository) -> None:
        self._employees = employee_repository

    async def execute(self, identity: Identity, employee_id: UUID) -> None:
        with store_guard("employee delete"):
            deleted = await self._employees.soft_delete_by_id(employee_id)
        if not deleted:
            raise employee_not_found(employee_id)

        logger.info(
            "Employee deleted",
            extra={"employee_id": str(employee_id), "actor_id": identity.actor_id},
        )
