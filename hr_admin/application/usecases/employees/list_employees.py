"""
===============================================================================
USE CASE: List Employees
===============================================================================

Responsibilities:
    - Devolver todos los empleados activos (created_at DESC).
    - Listar empleados de un departamento activo (NotFound si el
      departamento no existe o está eliminado).

Collaborators:
    - EmployeeRepository: find_all, find_by_department_id
    - DepartmentRepository: find_by_id
===============================================================================
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Employee
from ....domain.repositories import DepartmentRepository, EmployeeRepository
from ....identity.principal import Identity
from .._store import store_guard
from ..departments.department_rules import department_not_found


class ListEmployeesUseCase:
    def __init__(self, employee_repository: EmployeeRepository) -> None:
        self._employees = employee_repository

    async def execute(self, identity: Identity) -> List[Employee]:
        with store_guard("employee list"):
            employees = await self._employees.find_all()

        logger.info(
            "Employees listed",
            extra={"count": len(employees), "actor_id": identity.actor_id},
        )
        return employees


class ListDepartmentEmployeesUseCase:
    def __init__(
        self,
        employee_repository: EmployeeRepository,
        department_repository: DepartmentRepository,
    ) -> None:
        self._employees = employee_repository
        self._departments = department_repository

    async def execute(self, identity: Identity, department_id: UUID) -> List[Employee]:
        with store_guard("department lookup"):
            department = await self._departments.find_by_id(department_id)
        if department is None or department.is_deleted:
            raise department_not_found(department_id)

        with store_guard("employee list"):
            employees = await self._employees.find_by_department_id(department_id)

        logger.info(
            "Department employees listed",
            extra={
                "department_id": str(department_id),
                "count": len(employees),
                "actor_id": identity.actor_id,
            },
        )
        return employees
