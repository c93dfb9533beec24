"""
===============================================================================
USE CASE: Get Employee
===============================================================================
"""

from __future__ import annotations

from typing import Dict, Iterable
from uuid import UUID

from ....domain.entities import Department, Employee
from ....domain.repositories import DepartmentRepository, EmployeeRepository
from ....identity.principal import Identity
from .._store import store_guard
from .employee_rules import employee_not_found


class GetEmployeeUseCase:
    def __init__(self, employee_repository: EmployeeRepository) -> None:
        self._employees = employee_repository

    async def execute(self, identity: Identity, employee_id: UUID) -> Employee:
        with store_guard("employee lookup"):
            employee = await self._employees.find_by_id(employee_id)

        if employee is None or employee.is_deleted:
            raise employee_not_found(employee_id)
        return employee


class ResolveEmployeeDepartmentsUseCase:
    """
    Resuelve los departamentos activos referenciados por un set de empleados
    (para embeberlos en la respuesta). Referencias colgantes se omiten.
    """

    def __init__(self, department_repository: DepartmentRepository) -> None:
        self._departments = department_repository

    async def execute(self, employees: Iterable[Employee]) -> Dict[UUID, Department]:
        wanted = {e.department_id for e in employees if e.department_id is not None}
        if not wanted:
            return {}

        resolved: Dict[UUID, Department] = {}
        with store_guard("department lookup"):
            if len(wanted) == 1:
                (department_id,) = wanted
                department = await self._departments.find_by_id(department_id)
                if department is not None:
                    resolved[department.id] = department
            else:
                for department in await self._departments.find_all():
                    if department.id in wanted:
                        resolved[department.id] = department

        return {k: v for k, v in resolved.items() if not v.is_deleted}
