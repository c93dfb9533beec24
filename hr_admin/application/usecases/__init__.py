"""
Casos de uso (application layer).

Un caso de uso por archivo, con `execute(identity, ...)`; los errores se
lanzan directamente con la taxonomía de crosscutting/exceptions.py.
"""

from .departments import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    DeleteDepartmentUseCase,
    GetDepartmentUseCase,
    ListDepartmentsUseCase,
    UpdateDepartmentUseCase,
)
from .employees import (
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListDepartmentEmployeesUseCase,
    ListEmployeesUseCase,
    ResolveEmployeeDepartmentsUseCase,
    UpdateEmployeeUseCase,
)

__all__ = [
    "CreateDepartmentInput",
    "CreateDepartmentUseCase",
    "DeleteDepartmentUseCase",
    "GetDepartmentUseCase",
    "ListDepartmentsUseCase",
    "UpdateDepartmentUseCase",
    "CreateEmployeeInput",
    "CreateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "GetEmployeeUseCase",
    "ListDepartmentEmployeesUseCase",
    "ListEmployeesUseCase",
    "ResolveEmployeeDepartmentsUseCase",
    "UpdateEmployeeUseCase",
]
