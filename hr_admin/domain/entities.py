"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del dominio HR (Department / Employee)

Responsabilidades:
    - Representar departamentos y empleados como dataclasses simples.
    - Modelar el soft delete como estado de ciclo de vida explícito
      (ACTIVE / DELETED) derivado de deleted_at.

Colaboradores:
    - domain/repositories.py (contratos de persistencia)
    - application/usecases/* (reglas de negocio)
    - infrastructure/repositories/* (mapeo filas <-> entidades)

Notas:
    - Sin dependencias a DB/FastAPI.
    - Employee -> Department es una referencia débil (solo id): borrar el
      departamento limpia la referencia, nunca borra empleados.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class LifecycleState(str, Enum):
    """Estado de ciclo de vida de registros con soft delete."""

    ACTIVE = "ACTIVE"
    DELETED = "DELETED"


class _SoftDeletable:
    deleted_at: Optional[datetime]

    @property
    def state(self) -> LifecycleState:
        return LifecycleState.DELETED if self.deleted_at is not None else LifecycleState.ACTIVE

    @property
    def is_deleted(self) -> bool:
        """True si está soft-deleted."""
        return self.state is LifecycleState.DELETED


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------


@dataclass
class Department(_SoftDeletable):
    """Departamento organizacional (nombre único entre activos)."""

    id: UUID
    name: str
    description: Optional[str] = None

    # Auditoría
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Employee
# ---------------------------------------------------------------------------


class EmployeeStatus(str, Enum):
    """Estado laboral del empleado."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


@dataclass
class Employee(_SoftDeletable):
    """Empleado (email único entre activos)."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    position: str
    salary: Decimal
    hire_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    phone: Optional[str] = None
    department_id: Optional[UUID] = None

    # Auditoría
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
