"""
Name: HTTP Schema Tests

Responsibilities:
  - Partial-update requests distinguish "omitted" from "explicit null"
  - Employee requests accept snake_case and camelCase names
  - Responses expose salary as a number and embed the department
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from hr_admin.domain.entities import Department, Employee
from hr_admin.domain.patch import Present
from hr_admin.interfaces.api.http.schemas.departments import (
    CreateDepartmentReq,
    UpdateDepartmentReq,
)
from hr_admin.interfaces.api.http.schemas.employees import (
    CreateEmployeeReq,
    EmployeeRes,
    UpdateEmployeeReq,
)

pytestmark = pytest.mark.unit


def test_omitted_fields_are_absent_from_patch():
    patch = UpdateEmployeeReq.model_validate({"position": "Lead"}).to_patch()
    assert patch == {"position": Present("Lead")}


def test_explicit_null_is_present_none():
    patch = UpdateEmployeeReq.model_validate({"department_id": None}).to_patch()
    assert patch == {"department_id": Present(None)}


def test_department_patch_keeps_explicit_null_description():
    patch = UpdateDepartmentReq.model_validate({"description": None}).to_patch()
    assert patch == {"description": Present(None)}


def test_unknown_request_fields_are_rejected():
    with pytest.raises(ValidationError):
        CreateDepartmentReq.model_validate({"name": "X", "budget": 1})


def test_employee_response_embeds_department():
    department = Department(id=uuid4(), name="Engineering")
    employee = Employee(
        id=uuid4(),
        first_name="John",
        last_name="Doe",
        email="john@x.com",
        position="Dev",
        salary=Decimal("100000.00"),
        hire_date=date(2024, 1, 15),
        department_id=department.id,
    )

    res = EmployeeRes.from_entity(employee, department).model_dump(mode="json")

    assert res["salary"] == 100000.0
    assert res["status"] == "ACTIVE"
    assert res["department"]["name"] == "Engineering"


def test_employee_requests_accept_camel_case_names():
    department_id = uuid4()
    req = CreateEmployeeReq.model_validate(
        {
            "firstName": "John",
            "lastName": "Doe",
            "email": "john@x.com",
            "position": "Engineer",
            "salary": "100000",
            "hireDate": "2023-01-15",
            "departmentId": str(department_id),
        }
    )

    assert req.first_name == "John"
    assert req.hire_date == "2023-01-15"
    assert req.department_id == department_id


def test_camel_case_patch_uses_field_names():
    patch = UpdateEmployeeReq.model_validate(
        {"departmentId": None, "hireDate": "2024-02-01"}
    ).to_patch()

    assert patch == {"department_id": Present(None), "hire_date": Present("2024-02-01")}


def test_employee_request_errors_report_snake_case_fields():
    with pytest.raises(ValidationError) as exc:
        CreateEmployeeReq.model_validate({"firstName": "John", "nickname": "JD"})

    locs = {error["loc"][0] for error in exc.value.errors()}
    assert {"last_name", "hire_date", "nickname"} <= locs
    assert "lastName" not in locs
