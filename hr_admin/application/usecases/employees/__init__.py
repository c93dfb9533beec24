"""Casos de uso de Employee (reglas de negocio antes de persistir)."""

from .create_employee import CreateEmployeeInput, CreateEmployeeUseCase
from .delete_employee import DeleteEmployeeUseCase
from .get_employee import GetEmployeeUseCase, ResolveEmployeeDepartmentsUseCase
from .list_employees import ListDepartmentEmployeesUseCase, ListEmployeesUseCase
from .update_employee import UpdateEmployeeUseCase

__all__ = [
    "CreateEmployeeInput",
    "CreateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "GetEmployeeUseCase",
    "ListDepartmentEmployeesUseCase",
    "ListEmployeesUseCase",
    "ResolveEmployeeDepartmentsUseCase",
    "UpdateEmployeeUseCase",
]
