"""
===============================================================================
TARJETA CRC — hr_admin/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, identity, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Elegir el store según Settings.store_backend (memory | postgres).

Colaboradores:
  - hr_admin.crosscutting.config.get_settings
  - hr_admin.domain.repositories.* (puertos)
  - hr_admin.infrastructure.repositories.* (implementaciones)
  - hr_admin.identity.* (codec, hasher, auth service)
  - hr_admin.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - Los repos in-memory son singletons: su estado vive lo que vive el proceso.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateDepartmentUseCase,
    CreateEmployeeUseCase,
    DeleteDepartmentUseCase,
    DeleteEmployeeUseCase,
    GetDepartmentUseCase,
    GetEmployeeUseCase,
    ListDepartmentEmployeesUseCase,
    ListDepartmentsUseCase,
    ListEmployeesUseCase,
    ResolveEmployeeDepartmentsUseCase,
    UpdateDepartmentUseCase,
    UpdateEmployeeUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    DepartmentRepository,
    EmployeeRepository,
    UserRepository,
)
from .identity.auth_users import AuthenticationService
from .identity.passwords import PasswordHasher
from .identity.tokens import TokenCodec
from .infrastructure.repositories.in_memory import (
    InMemoryDepartmentRepository,
    InMemoryEmployeeRepository,
    InMemoryUserRepository,
)
from .infrastructure.repositories.postgres import (
    PostgresDepartmentRepository,
    PostgresEmployeeRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _uses_postgres() -> bool:
    """True si el store configurado es PostgreSQL."""
    return get_settings().store_backend == "postgres"


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_department_repository() -> DepartmentRepository:
    if _uses_postgres():
        return PostgresDepartmentRepository()
    return InMemoryDepartmentRepository()


@lru_cache(maxsize=1)
def get_employee_repository() -> EmployeeRepository:
    if _uses_postgres():
        return PostgresEmployeeRepository()
    return InMemoryEmployeeRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _uses_postgres():
        return PostgresUserRepository()
    return InMemoryUserRepository()


# =============================================================================
# Identity (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    settings = get_settings()
    return TokenCodec(
        secret=settings.jwt_secret,
        issuer=settings.jwt_issuer,
        ttl_seconds=settings.jwt_access_ttl_seconds,
    )


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        cost=settings.password_hash_cost,
        memory_cost_kib=settings.password_hash_memory_kib,
    )


def get_authentication_service() -> AuthenticationService:
    return AuthenticationService(
        users=get_user_repository(),
        hasher=get_password_hasher(),
        codec=get_token_codec(),
    )


# =============================================================================
# Casos de uso: Departments
# =============================================================================


def get_list_departments_use_case() -> ListDepartmentsUseCase:
    return ListDepartmentsUseCase(get_department_repository())


def get_get_department_use_case() -> GetDepartmentUseCase:
    return GetDepartmentUseCase(get_department_repository())


def get_create_department_use_case() -> CreateDepartmentUseCase:
    return CreateDepartmentUseCase(get_department_repository())


def get_update_department_use_case() -> UpdateDepartmentUseCase:
    return UpdateDepartmentUseCase(get_department_repository())


def get_delete_department_use_case() -> DeleteDepartmentUseCase:
    return DeleteDepartmentUseCase(
        get_department_repository(), get_employee_repository()
    )


# =============================================================================
# Casos de uso: Employees
# =============================================================================


def get_list_employees_use_case() -> ListEmployeesUseCase:
    return ListEmployeesUseCase(get_employee_repository())


def get_list_department_employees_use_case() -> ListDepartmentEmployeesUseCase:
    return ListDepartmentEmployeesUseCase(
        get_employee_repository(), get_department_repository()
    )


def get_get_employee_use_case() -> GetEmployeeUseCase:
    return GetEmployeeUseCase(get_employee_repository())


def get_create_employee_use_case() -> CreateEmployeeUseCase:
    return CreateEmployeeUseCase(get_employee_repository(), get_department_repository())


def get_update_employee_use_case() -> UpdateEmployeeUseCase:
    return UpdateEmployeeUseCase(get_employee_repository(), get_department_repository())


def get_delete_employee_use_case() -> DeleteEmployeeUseCase:
    return DeleteEmployeeUseCase(get_employee_repository())


def get_resolve_employee_departments_use_case() -> ResolveEmployeeDepartmentsUseCase:
    return ResolveEmployeeDepartmentsUseCase(get_department_repository())


# =============================================================================
# Tests
# =============================================================================


def reset_container() -> None:
    """Limpia singletons (tests: estado in-memory fresco por test)."""
    for factory in (
        get_department_repository,
        get_employee_repository,
        get_user_repository,
        get_token_codec,
        get_password_hasher,
    ):
        factory.cache_clear()
