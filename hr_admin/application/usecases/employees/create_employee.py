"""
===============================================================================
USE CASE: Create Employee
===============================================================================

Business Goal:
    Dar de alta un empleado validando reglas de negocio ANTES de persistir.

Orden de validación (determinístico):
    1) restricciones de campos (todas juntas)       -> Invalid
    2) unicidad de email                            -> Conflict
    3) existencia del departamento (si viene)       -> NotFound
    4) salary / hire_date / status (todas juntas)   -> Invalid
    Solo si todo pasa se escribe el registro.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateEmployeeUseCase

Collaborators:
    - EmployeeRepository: find_by_email, create
    - DepartmentRepository: find_by_id
    - employee_rules (parsing + mensajes)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ValidationCollector
from ....crosscutting.logger import logger
from ....domain.entities import Employee, EmployeeStatus
from ....domain.repositories import DepartmentRepository, EmployeeRepository
from ....identity.principal import Identity
from .._store import store_guard
from ..departments.department_rules import department_not_found
from .employee_rules import (
    FIELD_HIRE_DATE,
    FIELD_SALARY,
    FIELD_STATUS,
    MSG_HIRE_DATE,
    MSG_SALARY,
    MSG_STATUS,
    TEXT_RULES,
    check_text,
    employee_email_conflict,
    normalize_text,
    parse_hire_date,
    parse_salary,
    parse_status,
)


@dataclass(frozen=True)
class CreateEmployeeInput:
    first_name: str
    last_name: str
    email: str
    position: str
    salary: Any
    hire_date: Any
    phone: Optional[str] = None
    department_id: Optional[UUID] = None
    status: Optional[str] = None


class CreateEmployeeUseCase:
    def __init__(
        self,
        employee_repository: EmployeeRepository,
        department_repository: DepartmentRepository,
    ) -> None:
        self._employees = employee_repository
        self._departments = department_repository

    async def execute(
        self, identity: Identity, input_data: CreateEmployeeInput
    ) -> Employee:
        # ---------------------------------------------------------------------
        # 1) Restricciones de campos de texto.
        # ---------------------------------------------------------------------
        errors = ValidationCollector()
        values: dict[str, Optional[str]] = {}
        for rule in TEXT_RULES:
            value = normalize_text(rule, getattr(input_data, rule.field))
            check_text(errors, rule, value)
            values[rule.field] = value
        errors.raise_if_any()

        email = values["email"] or ""

        # ---------------------------------------------------------------------
        # 2) Unicidad de email.
        # ---------------------------------------------------------------------
        with store_guard("employee lookup"):
            existing = await self._employees.find_by_email(email)
        if existing is not None:
            raise employee_email_conflict(email)

        # ---------------------------------------------------------------------
        # 3) Departamento (referencia débil, debe estar activo).
        # ---------------------------------------------------------------------
        if input_data.department_id is not None:
            with store_guard("department lookup"):
                department = await self._departments.find_by_id(input_data.department_id)
            if department is None or department.is_deleted:
                raise department_not_found(input_data.department_id)

        # ---------------------------------------------------------------------
        # 4) Parsing: salary -> hire_date -> status.
        # ---------------------------------------------------------------------
        salary = parse_salary(input_data.salary)
        if salary is None:
            errors.add(FIELD_SALARY, MSG_SALARY)

        hire_date = parse_hire_date(input_data.hire_date)
        if hire_date is None:
            errors.add(FIELD_HIRE_DATE, MSG_HIRE_DATE)

        status = EmployeeStatus.ACTIVE
        if input_data.status is not None:
            parsed_status = parse_status(input_data.status)
            if parsed_status is None:
                errors.add(FIELD_STATUS, MSG_STATUS)
            else:
                status = parsed_status
        errors.raise_if_any()

        # ---------------------------------------------------------------------
        # 5) Persistir.
        # ---------------------------------------------------------------------
        now = datetime.now(timezone.utc)
        employee = Employee(
            id=uuid4(),
            first_name=values["first_name"] or "",
            last_name=values["last_name"] or "",
            email=email,
            phone=values["phone"],
            position=values["position"] or "",
            salary=salary,
            hire_date=hire_date,
            status=status,
            department_id=input_data.department_id,
            created_at=now,
            updated_at=now,
        )
        with store_guard(
            "employee create",
            on_duplicate=lambda _exc: employee_email_conflict(email),
        ):
            created = await self._employees.create(employee)

        logger.info(
            "Employee created",
            extra={"employee_id": str(created.id), "actor_id": identity.actor_id},
        )
        return created
