"""
Name: Employee Field Rule Tests

Responsibilities:
  - Salary parsing: accepted inputs, cents rounding, range and sign
  - Hire date and status parsing
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from hr_admin.application.usecases.employees.employee_rules import (
    SALARY_MAX,
    parse_hire_date,
    parse_salary,
    parse_status,
)
from hr_admin.domain.entities import EmployeeStatus

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("100000", Decimal("100000.00")),
        (100000, Decimal("100000.00")),
        (1234.5, Decimal("1234.50")),
        (" 10.005 ", Decimal("10.01")),
        ("0", Decimal("0.00")),
    ],
)
def test_parse_salary_accepts_numbers_and_numeric_strings(raw, expected):
    assert parse_salary(raw) == expected


@pytest.mark.parametrize("raw", ["-0", "-0.00", "-0.000"])
def test_negative_zero_salary_is_plain_zero(raw):
    value = parse_salary(raw)

    assert value == Decimal("0.00")
    assert not value.is_signed()
    assert str(value) == "0.00"


@pytest.mark.parametrize(
    "raw", [None, True, "", "abc", "-1", "-0.01", "NaN", "Infinity", "100000000"]
)
def test_parse_salary_rejects_invalid_values(raw):
    assert parse_salary(raw) is None


def test_salary_upper_bound_is_inclusive():
    assert parse_salary(str(SALARY_MAX)) == SALARY_MAX
    assert parse_salary("99999999.995") is None


def test_parse_hire_date_keeps_date_part():
    assert parse_hire_date("2024-01-15") == date(2024, 1, 15)
    assert parse_hire_date("2024-01-15T10:30:00Z") == date(2024, 1, 15)
    assert parse_hire_date(datetime(2024, 1, 15, 23, 0, tzinfo=timezone.utc)) == date(
        2024, 1, 15
    )
    assert parse_hire_date("15/01/2024") is None
    assert parse_hire_date("  ") is None


def test_parse_status():
    assert parse_status("INACTIVE") is EmployeeStatus.INACTIVE
    assert parse_status(EmployeeStatus.ACTIVE) is EmployeeStatus.ACTIVE
    assert parse_status("retired") is None
