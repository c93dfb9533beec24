"""Casos de uso de Department (reglas de negocio antes de persistir)."""

from .create_department import CreateDepartmentInput, CreateDepartmentUseCase
from .delete_department import DeleteDepartmentUseCase
from .get_department import GetDepartmentUseCase
from .list_departments import ListDepartmentsUseCase
from .update_department import UpdateDepartmentUseCase

__all__ = [
    "CreateDepartmentInput",
    "CreateDepartmentUseCase",
    "DeleteDepartmentUseCase",
    "GetDepartmentUseCase",
    "ListDepartmentsUseCase",
    "UpdateDepartmentUseCase",
]
