"""
===============================================================================
TARJETA CRC — hr_admin/interfaces/api/http/routers/employees.py
===============================================================================

Class/Module:
    Employee Router

Responsibilities:
    - Exponer CRUD HTTP de empleados + listado por departamento (solo ADMIN).
    - Embeber el departamento activo referenciado en cada respuesta.
    - Pasar la Identity del Gate explícitamente a cada caso de uso.

Collaborators:
    - hr_admin.application.usecases (employees)
    - hr_admin.identity.gate.require_admin
    - hr_admin.container (factories DI)
    - schemas.employees (DTOs Pydantic)
===============================================================================
"""

from __future__ import annotations

from typing import Iterable
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from hr_admin.application.usecases import (
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListDepartmentEmployeesUseCase,
    ListEmployeesUseCase,
    ResolveEmployeeDepartmentsUseCase,
    UpdateEmployeeUseCase,
)
from hr_admin.container import (
    get_create_employee_use_case,
    get_delete_employee_use_case,
    get_get_employee_use_case,
    get_list_department_employees_use_case,
    get_list_employees_use_case,
    get_resolve_employee_departments_use_case,
    get_update_employee_use_case,
)
from hr_admin.domain.entities import Employee
from hr_admin.identity.gate import require_admin
from hr_admin.identity.principal import Identity

from ..schemas.employees import (
    CreateEmployeeReq,
    EmployeeRes,
    EmployeesListRes,
    UpdateEmployeeReq,
)

router = APIRouter(prefix="/employees", tags=["employees"])


# =============================================================================
# Helpers internos
# =============================================================================


async def _to_list_res(
    employees: Iterable[Employee], resolver: ResolveEmployeeDepartmentsUseCase
) -> EmployeesListRes:
    employees = list(employees)
    departments = await resolver.execute(employees)
    return EmployeesListRes(
        employees=[
            EmployeeRes.from_entity(e, departments.get(e.department_id))
            for e in employees
        ],
        total=len(employees),
    )


async def _to_res(
    employee: Employee, resolver: ResolveEmployeeDepartmentsUseCase
) -> EmployeeRes:
    departments = await resolver.execute([employee])
    return EmployeeRes.from_entity(employee, departments.get(employee.department_id))


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=EmployeesListRes)
async def list_employees(
    identity: Identity = Depends(require_admin()),
    use_case: ListEmployeesUseCase = Depends(get_list_employees_use_case),
    resolver: ResolveEmployeeDepartmentsUseCase = Depends(
        get_resolve_employee_departments_use_case
    ),
):
    return await _to_list_res(await use_case.execute(identity), resolver)


@router.get("/department/{department_id}", response_model=EmployeesListRes)
async def list_department_employees(
    department_id: UUID,
    identity: Identity = Depends(require_admin()),
    use_case: ListDepartmentEmployeesUseCase = Depends(
        get_list_department_employees_use_case
    ),
    resolver: ResolveEmployeeDepartmentsUseCase = Depends(
        get_resolve_employee_departments_use_case
    ),
):
    employees = await use_case.execute(identity, department_id)
    return await _to_list_res(employees, resolver)


@router.post("", response_model=EmployeeRes, status_code=201)
async def create_employee(
    req: CreateEmployeeReq,
    identity: Identity = Depends(require_admin()),
    use_case: CreateEmployeeUseCase = Depends(get_create_employee_use_case),
    resolver: ResolveEmployeeDepartmentsUseCase = Depends(
        get_resolve_employee_departments_use_case
    ),
):
    created = await use_case.execute(
        identity,
        CreateEmployeeInput(
            first_name=req.first_name,
            last_name=req.last_name,
            email=req.email,
            phone=req.phone,
            position=req.position,
            salary=req.salary,
            hire_date=req.hire_date,
            department_id=req.department_id,
            status=req.status,
        ),
    )
    return await _to_res(created, resolver)


@router.get("/{employee_id}", response_model=EmployeeRes)
async def get_employee(
    employee_id: UUID,
    identity: Identity = Depends(require_admin()),
    use_case: GetEmployeeUseCase = Depends(get_get_employee_use_case),
    resolver: ResolveEmployeeDepartmentsUseCase = Depends(
        get_resolve_employee_departments_use_case
    ),
):
    return await _to_res(await use_case.execute(identity, employee_id), resolver)


@router.put("/{employee_id}", response_model=EmployeeRes)
async def replace_employee(
    employee_id: UUID,
    req: UpdateEmployeeReq,
    identity: Identity = Depends(require_admin()),
    use_case: UpdateEmployeeUseCase = Depends(get_update_employee_use_case),
    resolver: ResolveEmployeeDepartmentsUseCase = Depends(
        get_resolve_employee_departments_use_case
    ),
):
    # PUT conserva la semántica de merge parcial (compatibilidad de clientes).
    updated = await use_case.execute(identity, employee_id, req.to_patch())
    return await _to_res(updated, resolver)


@router.patch("/{employee_id}", response_model=EmployeeRes)
async def update_employee(
    employee_id: UUID,
    req: UpdateEmployeeReq,
    identity: Identity = Depends(require_admin()),
    use_case: UpdateEmployeeUseCase = Depends(get_update_employee_use_case),
    resolver: ResolveEmployeeDepartmentsUseCase = Depends(
        get_resolve_employee_departments_use_case
    ),
):
    updated = await use_case.execute(identity, employee_id, req.to_patch())
    return await _to_res(updated, resolver)


@router.delete("/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: UUID,
    identity: Identity = Depends(require_admin()),
    use_case: DeleteEmployeeUseCase = Depends(get_delete_employee_use_case),
):
    await use_case.execute(identity, employee_id)
    return Response(status_code=204)
