"""
===============================================================================
TARJETA CRC — schemas/employees.py
===============================================================================

Módulo:
    Schemas HTTP para Employees

Responsabilidades:
    - Definir DTOs de request/response (solo forma/tipos).
    - salary acepta string o número; el parseo/rango lo decide el caso de uso.
    - hire_date se recibe como string ISO; el caso de uso lo parsea.
    - Construir el patch (absent | Present) desde model_fields_set.
    - Aceptar los nombres camelCase de clientes existentes además de snake_case.
      Las respuestas se serializan en snake_case.

Colaboradores:
    - domain.entities.Employee, EmployeeStatus
    - domain.patch.Present
    - schemas.departments.DepartmentRes (departamento embebido)
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hr_admin.domain.entities import Department, Employee, EmployeeStatus
from hr_admin.domain.patch import Patch, Present

from .departments import DepartmentRes

SalaryIn = Union[str, int, float]

# Entrada en snake_case o camelCase (firstName, hireDate, departmentId);
# los errores se reportan siempre con el nombre snake_case del campo.
_REQUEST_CONFIG = ConfigDict(
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
    loc_by_alias=False,
)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateEmployeeReq(BaseModel):
    """Request para dar de alta un empleado."""

    model_config = _REQUEST_CONFIG

    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    position: str
    salary: SalaryIn = Field(..., description="Decimal no negativo ('100000' o 100000)")
    hire_date: str = Field(..., description="Fecha ISO (YYYY-MM-DD)")
    department_id: UUID | None = None
    status: str | None = Field(default=None, description="ACTIVE | INACTIVE")


class UpdateEmployeeReq(BaseModel):
    """
    Request de actualización parcial.

    Un campo omitido NO se toca; `"department_id": null` desasigna el
    departamento y `"phone": null` lo limpia.
    """

    model_config = _REQUEST_CONFIG

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    position: str | None = None
    salary: SalaryIn | None = None
    hire_date: str | None = None
    department_id: UUID | None = None
    status: str | None = None

    def to_patch(self) -> Patch:
        return {name: Present(getattr(self, name)) for name in self.model_fields_set}


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class EmployeeRes(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    position: str
    salary: float
    hire_date: date
    status: EmployeeStatus
    department_id: UUID | None = None
    department: DepartmentRes | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(
        cls, employee: Employee, department: Department | None = None
    ) -> "EmployeeRes":
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            phone=employee.phone,
            position=employee.position,
            salary=float(employee.salary),
            hire_date=employee.hire_date,
            status=employee.status,
            department_id=employee.department_id,
            department=DepartmentRes.from_entity(department) if department else None,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


class EmployeesListRes(BaseModel):
    employees: list[EmployeeRes]
    total: int
