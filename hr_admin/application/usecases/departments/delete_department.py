"""
===============================================================================
USE CASE: Delete Department (soft delete)
===============================================================================

Business Goal:
    Desasignar a los empleados del departamento y luego marcarlo como
    eliminado.

Invariantes:
    * NotFound si no existe o ya estaba eliminado (no idempotente)
    * nunca borra empleados: solo limpia employee.department_id
    * las referencias se limpian ANTES del soft delete: si el segundo paso
      falla, el departamento sigue activo y un reintento completa el borrado

Collaborators:
    - DepartmentRepository: find_by_id, soft_delete_by_id
    - EmployeeRepository: clear_department
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import DepartmentRepository, EmployeeRepository
from ....identity.principal import Identity
from .._store import store_guard
from .department_rules import department_not_found


class DeleteDepartmentUseCase:
    def __init__(
        self,
        department_repository: DepartmentRepository,
        employee_repository: EmployeeRepository,
    ) -> None:
        self._departments = department_repository
        self._employees = employee_repository

    async def execute(self, identity: Identity, department_id: UUID) -> None:
        with store_guard("department lookup"):
            existing = await self._departments.find_by_id(department_id)
        if existing is None or existing.is_deleted:
            raise department_not_found(department_id)

        with store_guard("employee department clear"):
            cleared = await self._employees.clear_department(department_id)

        with store_guard("department delete"):
            deleted = await self._departments.soft_delete_by_id(department_id)
        if not deleted:
            # Borrado concurrente entre el lookup y este paso.
            raise department_not_found(department_id)

        logger.info(
            "Department deleted",
            extra={
                "department_id": str(department_id),
                "employees_unassigned": cleared,
                "actor_id": identity.actor_id,
            },
        )
