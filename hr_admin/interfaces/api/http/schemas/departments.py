"""
===============================================================================
TARJETA CRC — schemas/departments.py
===============================================================================

Módulo:
    Schemas HTTP para Departments

Responsabilidades:
    - Definir DTOs de request/response (solo forma/tipos).
    - Las reglas de negocio (longitudes, unicidad) viven en los casos de uso.
    - Construir el patch (absent | Present) desde model_fields_set.

Colaboradores:
    - domain.entities.Department
    - domain.patch.Present
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from hr_admin.domain.entities import Department
from hr_admin.domain.patch import Patch, Present


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateDepartmentReq(BaseModel):
    """Request para crear departamento."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Nombre único del departamento")
    description: str | None = Field(default=None, description="Descripción libre")


class UpdateDepartmentReq(BaseModel):
    """
    Request de actualización parcial.

    Un campo omitido NO se toca; `"description": null` limpia la descripción.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None

    def to_patch(self) -> Patch:
        return {name: Present(getattr(self, name)) for name in self.model_fields_set}


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class DepartmentRes(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, department: Department) -> "DepartmentRes":
        return cls(
            id=department.id,
            name=department.name,
            description=department.description,
            created_at=department.created_at,
            updated_at=department.updated_at,
        )


class DepartmentsListRes(BaseModel):
    departments: list[DepartmentRes]
    total: int
