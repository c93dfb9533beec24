"""
===============================================================================
USE CASE: Update Employee (merge parcial)
===============================================================================

Business Goal:
    Aplicar solo los campos presentes en el patch, revalidando lo que cambia.

Invariantes:
    * NotFound si el empleado no existe o está eliminado
    * campo ausente -> no se toca
    * Present(None): limpia phone / department_id; en campos requeridos es Invalid
    * email distinto del actual -> unicidad
    * department_id distinto del actual (y no None) -> debe existir y estar activo
    * salary / hire_date / status se re-parsean solo si están presentes
    * patch vacío -> devuelve el registro actual sin escribir

Collaborators:
    - EmployeeRepository: find_by_id, find_by_email, update_by_id
    - DepartmentRepository: find_by_id
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict
from uuid import UUID

from ....crosscutting.exceptions import ValidationCollector
from ....crosscutting.logger import logger
from ....domain.entities import Employee
from ....domain.patch import Patch, unknown_fields
from ....domain.repositories import DepartmentRepository, EmployeeRepository
from ....identity.principal import Identity
from .._store import store_guard
from ..departments.department_rules import department_not_found
from .employee_rules import (
    FIELD_DEPARTMENT_ID,
    FIELD_EMAIL,
    FIELD_HIRE_DATE,
    FIELD_SALARY,
    FIELD_STATUS,
    MSG_HIRE_DATE,
    MSG_SALARY,
    MSG_STATUS,
    TEXT_RULES,
    UPDATABLE_FIELDS,
    check_text,
    employee_email_conflict,
    employee_not_found,
    normalize_text,
    parse_hire_date,
    parse_salary,
    parse_status,
)


class UpdateEmployeeUseCase:
    def __init__(
        self,
        employee_repository: EmployeeRepository,
        department_repository: DepartmentRepository,
    ) -> None:
        self._employees = employee_repository
        self._departments = department_repository

    async def execute(
        self, identity: Identity, employee_id: UUID, patch: Patch
    ) -> Employee:
        # ---------------------------------------------------------------------
        # 1) Cargar registro actual.
        # ---------------------------------------------------------------------
        with store_guard("employee lookup"):
            current = await self._employees.find_by_id(employee_id)
        if current is None or current.is_deleted:
            raise employee_not_found(employee_id)

        # ---------------------------------------------------------------------
        # 2) Restricciones de campos de texto presentes.
        # ---------------------------------------------------------------------
        errors = ValidationCollector()
        for field_name in unknown_fields(patch, UPDATABLE_FIELDS):
            errors.add(field_name, f"Unknown field: {field_name}")

        changes: Dict[str, Any] = {}
        for rule in TEXT_RULES:
            if rule.field in patch:
                value = normalize_text(rule, patch[rule.field].value)
                check_text(errors, rule, value)
                changes[rule.field] = value
        errors.raise_if_any()

        # ---------------------------------------------------------------------
        # 3) Unicidad de email (solo si cambia).
        # ---------------------------------------------------------------------
        new_email = changes.get(FIELD_EMAIL)
        if new_email is not None and new_email != current.email:
            with store_guard("employee lookup"):
                existing = await self._employees.find_by_email(new_email)
            if existing is not None and existing.id != employee_id:
                raise employee_email_conflict(new_email)

        # ---------------------------------------------------------------------
        # 4) Departamento (solo si cambia; None = desasignar).
        # ---------------------------------------------------------------------
        if FIELD_DEPARTMENT_ID in patch:
            new_department_id = patch[FIELD_DEPARTMENT_ID].value
            if new_department_id is not None and new_department_id != current.department_id:
                with store_guard("department lookup"):
                    department = await self._departments.find_by_id(new_department_id)
                if department is None or department.is_deleted:
                    raise department_not_found(new_department_id)
            changes[FIELD_DEPARTMENT_ID] = new_department_id

        # ---------------------------------------------------------------------
        # 5) Parsing de campos presentes: salary -> hire_date -> status.
        # ---------------------------------------------------------------------
        if FIELD_SALARY in patch:
            salary = parse_salary(patch[FIELD_SALARY].value)
            if salary is None:
                errors.add(FIELD_SALARY, MSG_SALARY)
            changes[FIELD_SALARY] = salary
        if FIELD_HIRE_DATE in patch:
            hire_date = parse_hire_date(patch[FIELD_HIRE_DATE].value)
            if hire_date is None:
                errors.add(FIELD_HIRE_DATE, MSG_HIRE_DATE)
            changes[FIELD_HIRE_DATE] = hire_date
        if FIELD_STATUS in patch:
            status = parse_status(patch[FIELD_STATUS].value)
            if status is None:
                errors.add(FIELD_STATUS, MSG_STATUS)
            changes[FIELD_STATUS] = status
        errors.raise_if_any()

        if not changes:
            return current

        # ---------------------------------------------------------------------
        # 6) Persistir merge.
        # ---------------------------------------------------------------------
        with store_guard(
            "employee update",
            on_duplicate=lambda _exc: employee_email_conflict(str(new_email)),
        ):
            updated = await self._employees.update_by_id(employee_id, changes)

        if updated is None:
            # Race: borrado entre lectura y escritura.
            raise employee_not_found(employee_id)

        logger.info(
            "Employee updated",
            extra={
                "employee_id": str(employee_id),
                "fields": sorted(changes),
                "actor_id": identity.actor_id,
            },
        )
        return updated
