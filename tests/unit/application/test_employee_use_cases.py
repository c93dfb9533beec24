"""
Name: Employee Use Case Tests

Responsibilities:
  - Create: text checks -> email conflict -> department -> parsing
  - Update: partial merge, explicit clears, change-only checks
  - Department-scoped listing and department embedding lookups
  - Store failures mapped to Internal / Conflict
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from hr_admin.application.usecases import (
    CreateDepartmentInput,
    CreateDepartmentUseCase,
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteDepartmentUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListDepartmentEmployeesUseCase,
    ListEmployeesUseCase,
    ResolveEmployeeDepartmentsUseCase,
    UpdateEmployeeUseCase,
)
from hr_admin.crosscutting.exceptions import (
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from hr_admin.domain.entities import EmployeeStatus
from hr_admin.domain.patch import Present, make_patch
from hr_admin.domain.repositories import DuplicateKeyError, StoreError

pytestmark = pytest.mark.unit


def _input(**overrides) -> CreateEmployeeInput:
    values = dict(
        first_name="John",
        last_name="Doe",
        email="john@x.com",
        position="Dev",
        salary="100000",
        hire_date="2024-01-15",
    )
    values.update(overrides)
    return CreateEmployeeInput(**values)


@pytest.fixture
def create_employee(employee_repo, department_repo):
    return CreateEmployeeUseCase(employee_repo, department_repo)


@pytest.fixture
def update_employee(employee_repo, department_repo):
    return UpdateEmployeeUseCase(employee_repo, department_repo)


@pytest_asyncio.fixture
async def engineering(department_repo, admin_identity):
    return await CreateDepartmentUseCase(department_repo).execute(
        admin_identity, CreateDepartmentInput(name="Engineering")
    )


# =============================================================================
# Create
# =============================================================================


@pytest.mark.asyncio
async def test_create_in_department(create_employee, engineering, admin_identity):
    employee = await create_employee.execute(
        admin_identity, _input(department_id=engineering.id)
    )

    assert employee.salary == Decimal("100000.00")
    assert employee.hire_date == date(2024, 1, 15)
    assert employee.status == EmployeeStatus.ACTIVE
    assert employee.department_id == engineering.id
    assert employee.phone is None


@pytest.mark.asyncio
async def test_create_normalizes_text_fields(create_employee, admin_identity):
    employee = await create_employee.execute(
        admin_identity,
        _input(first_name=" John ", email="  John@X.COM ", phone="  ", salary=1234.5),
    )

    assert employee.first_name == "John"
    assert employee.email == "john@x.com"
    assert employee.phone is None
    assert employee.salary == Decimal("1234.50")


@pytest.mark.asyncio
async def test_create_accepts_iso_datetime_hire_date(create_employee, admin_identity):
    employee = await create_employee.execute(
        admin_identity, _input(hire_date="2024-01-15T10:30:00Z")
    )
    assert employee.hire_date == date(2024, 1, 15)


@pytest.mark.asyncio
async def test_create_with_explicit_status(create_employee, admin_identity):
    employee = await create_employee.execute(admin_identity, _input(status="INACTIVE"))
    assert employee.status == EmployeeStatus.INACTIVE


@pytest.mark.asyncio
async def test_create_with_unknown_department_creates_nothing(
    create_employee, employee_repo, admin_identity
):
    with pytest.raises(NotFoundError):
        await create_employee.execute(admin_identity, _input(department_id=uuid4()))

    assert await employee_repo.find_all() == []


@pytest.mark.asyncio
async def test_create_with_deleted_department_is_not_found(
    create_employee, department_repo, employee_repo, engineering, admin_identity
):
    await DeleteDepartmentUseCase(department_repo, employee_repo).execute(
        admin_identity, engineering.id
    )

    with pytest.raises(NotFoundError):
        await create_employee.execute(
            admin_identity, _input(department_id=engineering.id)
        )


@pytest.mark.asyncio
async def test_create_duplicate_email_is_conflict(create_employee, admin_identity):
    await create_employee.execute(admin_identity, _input())

    with pytest.raises(ConflictError) as exc:
        await create_employee.execute(admin_identity, _input(email="JOHN@x.com"))

    assert exc.value.message == 'Employee with email "john@x.com" already exists'


@pytest.mark.asyncio
async def test_create_collects_all_text_violations(create_employee, admin_identity):
    with pytest.raises(InvalidInputError) as exc:
        await create_employee.execute(
            admin_identity,
            _input(first_name="", last_name="x" * 51, position="", phone="1" * 21),
        )

    assert exc.value.details == {
        "first_name": ["First name is required"],
        "last_name": ["Last name must not exceed 50 characters"],
        "phone": ["Phone must not exceed 20 characters"],
        "position": ["Position is required"],
    }
    assert exc.value.message == "First name is required"


@pytest.mark.asyncio
async def test_create_collects_parse_violations(create_employee, admin_identity):
    with pytest.raises(InvalidInputError) as exc:
        await create_employee.execute(
            admin_identity, _input(salary="-1", hire_date="yesterday", status="FIRED")
        )

    assert exc.value.details == {
        "salary": ["Salary must be a valid positive number"],
        "hire_date": ["Hire date must be a valid date"],
        "status": ["Status must be one of: ACTIVE, INACTIVE"],
    }


@pytest.mark.asyncio
async def test_text_violations_win_over_email_conflict(create_employee, admin_identity):
    await create_employee.execute(admin_identity, _input())

    with pytest.raises(InvalidInputError):
        await create_employee.execute(admin_identity, _input(first_name=""))


@pytest.mark.asyncio
async def test_email_conflict_wins_over_unknown_department(
    create_employee, admin_identity
):
    await create_employee.execute(admin_identity, _input())

    with pytest.raises(ConflictError):
        await create_employee.execute(admin_identity, _input(department_id=uuid4()))


@pytest.mark.asyncio
async def test_unknown_department_wins_over_bad_salary(create_employee, admin_identity):
    with pytest.raises(NotFoundError):
        await create_employee.execute(
            admin_identity, _input(department_id=uuid4(), salary="abc")
        )


# =============================================================================
# Update
# =============================================================================


@pytest.mark.asyncio
async def test_update_merges_present_fields(
    create_employee, update_employee, admin_identity
):
    created = await create_employee.execute(admin_identity, _input(phone="555-1234"))

    updated = await update_employee.execute(
        admin_identity, created.id, make_patch(position="Lead", salary="120000.555")
    )

    assert updated.position == "Lead"
    assert updated.salary == Decimal("120000.56")
    assert updated.phone == "555-1234"
    assert updated.first_name == "John"


@pytest.mark.asyncio
async def test_update_clears_department_explicitly(
    create_employee, update_employee, engineering, admin_identity
):
    created = await create_employee.execute(
        admin_identity, _input(department_id=engineering.id)
    )

    updated = await update_employee.execute(
        admin_identity, created.id, {"department_id": Present(None)}
    )

    assert updated.department_id is None


@pytest.mark.asyncio
async def test_absent_department_is_left_untouched(
    create_employee, update_employee, engineering, admin_identity
):
    created = await create_employee.execute(
        admin_identity, _input(department_id=engineering.id)
    )

    updated = await update_employee.execute(
        admin_identity, created.id, make_patch(last_name="Smith")
    )

    assert updated.department_id == engineering.id


@pytest.mark.asyncio
async def test_update_to_unknown_department_is_not_found(
    create_employee, update_employee, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())

    with pytest.raises(NotFoundError):
        await update_employee.execute(
            admin_identity, created.id, make_patch(department_id=uuid4())
        )


@pytest.mark.asyncio
async def test_update_email_to_taken_address_is_conflict(
    create_employee, update_employee, admin_identity
):
    await create_employee.execute(admin_identity, _input(email="a@x.com"))
    b = await create_employee.execute(admin_identity, _input(email="b@x.com"))

    with pytest.raises(ConflictError):
        await update_employee.execute(admin_identity, b.id, make_patch(email="A@x.com"))


@pytest.mark.asyncio
async def test_update_email_to_own_address_is_allowed(
    create_employee, update_employee, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())

    updated = await update_employee.execute(
        admin_identity, created.id, make_patch(email=" JOHN@x.com ")
    )

    assert updated.email == "john@x.com"


@pytest.mark.asyncio
async def test_update_rejects_unknown_field(
    create_employee, update_employee, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())

    with pytest.raises(InvalidInputError) as exc:
        await update_employee.execute(admin_identity, created.id, make_patch(id=uuid4()))

    assert exc.value.details == {"id": ["Unknown field: id"]}


@pytest.mark.asyncio
async def test_update_rejects_invalid_status(
    create_employee, update_employee, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())

    with pytest.raises(InvalidInputError) as exc:
        await update_employee.execute(admin_identity, created.id, make_patch(status="x"))

    assert exc.value.details == {"status": ["Status must be one of: ACTIVE, INACTIVE"]}


@pytest.mark.asyncio
async def test_update_missing_employee_is_not_found(update_employee, admin_identity):
    with pytest.raises(NotFoundError):
        await update_employee.execute(admin_identity, uuid4(), make_patch(position="X"))


@pytest.mark.asyncio
async def test_empty_patch_returns_current(
    create_employee, update_employee, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())

    assert await update_employee.execute(admin_identity, created.id, {}) == created


# =============================================================================
# Delete / List / Resolve
# =============================================================================


@pytest.mark.asyncio
async def test_deleted_employee_is_invisible(
    create_employee, employee_repo, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())
    delete = DeleteEmployeeUseCase(employee_repo)

    await delete.execute(admin_identity, created.id)

    with pytest.raises(NotFoundError):
        await GetEmployeeUseCase(employee_repo).execute(admin_identity, created.id)
    with pytest.raises(NotFoundError):
        await delete.execute(admin_identity, created.id)
    assert await ListEmployeesUseCase(employee_repo).execute(admin_identity) == []


@pytest.mark.asyncio
async def test_deleted_employee_email_can_be_reused(
    create_employee, employee_repo, admin_identity
):
    created = await create_employee.execute(admin_identity, _input())
    await DeleteEmployeeUseCase(employee_repo).execute(admin_identity, created.id)

    again = await create_employee.execute(admin_identity, _input())

    assert again.id != created.id


@pytest.mark.asyncio
async def test_list_by_department(
    create_employee, employee_repo, department_repo, engineering, admin_identity
):
    inside = await create_employee.execute(
        admin_identity, _input(email="in@x.com", department_id=engineering.id)
    )
    await create_employee.execute(admin_identity, _input(email="out@x.com"))

    listed = await ListDepartmentEmployeesUseCase(
        employee_repo, department_repo
    ).execute(admin_identity, engineering.id)

    assert [e.id for e in listed] == [inside.id]


@pytest.mark.asyncio
async def test_list_by_deleted_department_is_not_found(
    employee_repo, department_repo, engineering, admin_identity
):
    await DeleteDepartmentUseCase(department_repo, employee_repo).execute(
        admin_identity, engineering.id
    )

    with pytest.raises(NotFoundError):
        await ListDepartmentEmployeesUseCase(employee_repo, department_repo).execute(
            admin_identity, engineering.id
        )


@pytest.mark.asyncio
async def test_resolve_departments_for_employees(
    create_employee, department_repo, engineering, admin_identity
):
    with_dept = await create_employee.execute(
        admin_identity, _input(email="a@x.com", department_id=engineering.id)
    )
    without = await create_employee.execute(admin_identity, _input(email="b@x.com"))

    resolved = await ResolveEmployeeDepartmentsUseCase(department_repo).execute(
        [with_dept, without]
    )

    assert list(resolved) == [engineering.id]
    assert resolved[engineering.id].name == "Engineering"


# =============================================================================
# Store failures
# =============================================================================


class _FailingEmployees:
    """Lecturas OK; `find_all`, `create` y `update_by_id` fallan con `error`."""

    def __init__(self, error: Exception, existing=None):
        self._error = error
        self._existing = existing

    async def find_all(self):
        raise self._error

    async def find_by_id(self, employee_id):
        return self._existing

    async def find_by_email(self, email):
        return None

    async def create(self, employee):
        raise self._error

    async def update_by_id(self, employee_id, changes):
        raise self._error


@pytest.mark.asyncio
async def test_duplicate_email_on_insert_is_conflict(department_repo, admin_identity):
    use_case = CreateEmployeeUseCase(
        _FailingEmployees(DuplicateKeyError("uq_employees_email_active")),
        department_repo,
    )

    with pytest.raises(ConflictError) as exc:
        await use_case.execute(admin_identity, _input(email="  Race@X.com "))

    assert exc.value.message == 'Employee with email "race@x.com" already exists'
    assert isinstance(exc.value.__cause__, DuplicateKeyError)


@pytest.mark.asyncio
async def test_duplicate_email_on_update_is_conflict(
    create_employee, department_repo, admin_identity
):
    current = await create_employee.execute(admin_identity, _input())
    use_case = UpdateEmployeeUseCase(
        _FailingEmployees(DuplicateKeyError("uq_employees_email_active"), current),
        department_repo,
    )

    with pytest.raises(ConflictError) as exc:
        await use_case.execute(
            admin_identity, current.id, make_patch(email="taken@x.com")
        )

    assert exc.value.message == 'Employee with email "taken@x.com" already exists'


@pytest.mark.asyncio
async def test_employee_store_failure_on_list_is_internal(admin_identity):
    use_case = ListEmployeesUseCase(_FailingEmployees(StoreError("boom")))

    with pytest.raises(InternalError) as exc:
        await use_case.execute(admin_identity)

    assert exc.value.message == "Store failure during employee list"
    assert isinstance(exc.value.original_error, StoreError)


@pytest.mark.asyncio
async def test_employee_store_failure_on_insert_is_internal(
    department_repo, admin_identity
):
    use_case = CreateEmployeeUseCase(_FailingEmployees(StoreError("timeout")), department_repo)

    with pytest.raises(InternalError) as exc:
        await use_case.execute(admin_identity, _input())

    assert exc.value.message == "Store failure during employee create"


@pytest.mark.asyncio
async def test_employee_store_failure_on_update_is_internal(
    create_employee, department_repo, admin_identity
):
    current = await create_employee.execute(admin_identity, _input())
    use_case = UpdateEmployeeUseCase(
        _FailingEmployees(StoreError("timeout"), current), department_repo
    )

    with pytest.raises(InternalError) as exc:
        await use_case.execute(admin_identity, current.id, make_patch(position="Lead"))

    assert exc.value.message == "Store failure during employee update"
