"""
===============================================================================
TARJETA CRC — hr_admin/interfaces/api/http/routers/departments.py
===============================================================================

Class/Module:
    Department Router

Responsibilities:
    - Exponer CRUD HTTP de departamentos (solo ADMIN).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Pasar la Identity del Gate explícitamente a cada caso de uso.

Collaborators:
    - hr_admin.application.usecases (departments)
    - hr_admin.identity.gate.require_admin
    - hr_admin.container (factories DI)
    - schemas.departments (DTOs Pydantic)

Notes:
    - Los errores de la taxonomía se propagan; los renderiza
      api/exception_handlers.py (RFC7807).
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from hr_admin.application.usecases import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    DeleteDepartmentUseCase,
    GetDepartmentUseCase,
    ListDepartmentsUseCase,
    UpdateDepartmentUseCase,
)
from hr_admin.container import (
    get_create_department_use_case,
    get_delete_department_use_case,
    get_get_department_use_case,
    get_list_departments_use_case,
    get_update_department_use_case,
)
from hr_admin.identity.gate import require_admin
from hr_admin.identity.principal import Identity

from ..schemas.departments import (
    CreateDepartmentReq,
    DepartmentRes,
    DepartmentsListRes,
    UpdateDepartmentReq,
)

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=DepartmentsListRes)
async def list_departments(
    identity: Identity = Depends(require_admin()),
    use_case: ListDepartmentsUseCase = Depends(get_list_departments_use_case),
):
    departments = await use_case.execute(identity)
    return DepartmentsListRes(
        departments=[DepartmentRes.from_entity(d) for d in departments],
        total=len(departments),
    )


@router.post("", response_model=DepartmentRes, status_code=201)
async def create_department(
    req: CreateDepartmentReq,
    identity: Identity = Depends(require_admin()),
    use_case: CreateDepartmentUseCase = Depends(get_create_department_use_case),
):
    created = await use_case.execute(
        identity,
        CreateDepartmentInput(name=req.name, description=req.description),
    )
    return DepartmentRes.from_entity(created)


@router.get("/{department_id}", response_model=DepartmentRes)
async def get_department(
    department_id: UUID,
    identity: Identity = Depends(require_admin()),
    use_case: GetDepartmentUseCase = Depends(get_get_department_use_case),
):
    return DepartmentRes.from_entity(await use_case.execute(identity, department_id))


async def _update(
    department_id: UUID,
    req: UpdateDepartmentReq,
    identity: Identity,
    use_case: UpdateDepartmentUseCase,
) -> DepartmentRes:
    updated = await use_case.execute(identity, department_id, req.to_patch())
    return DepartmentRes.from_entity(updated)


@router.put("/{department_id}", response_model=DepartmentRes)
async def replace_department(
    department_id: UUID,
    req: UpdateDepartmentReq,
    identity: Identity = Depends(require_admin()),
    use_case: UpdateDepartmentUseCase = Depends(get_update_department_use_case),
):
    # PUT conserva la semántica de merge parcial (compatibilidad de clientes).
    return await _update(department_id, req, identity, use_case)


@router.patch("/{department_id}", response_model=DepartmentRes)
async def update_department(
    department_id: UUID,
    req: UpdateDepartmentReq,
    identity: Identity = Depends(require_admin()),
    use_case: UpdateDepartmentUseCase = Depends(get_update_department_use_case),
):
    return await _update(department_id, req, identity, use_case)


@router.delete("/{department_id}", status_code=204)
async def delete_department(
    department_id: UUID,
    identity: Identity = Depends(require_admin()),
    use_case: DeleteDepartmentUseCase = Depends(get_delete_department_use_case),
):
    await use_case.execute(identity, department_id)
    return Response(status_code=204)
