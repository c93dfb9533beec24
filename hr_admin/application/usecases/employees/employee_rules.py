"""
===============================================================================
TARJETA CRC — application/usecases/employees/employee_rules.py
===============================================================================

Módulo:
    Reglas de campo y parsing de Employee

Responsabilidades:
    - Normalizar y validar campos de texto (requeridos + longitudes).
    - Parsear salary (Decimal >= 0, centavos), hire_date (fecha ISO) y status.
    - Construir NotFound / Conflict con mensajes estables.

Notas:
    - Las funciones parse_* devuelven None si el valor es inválido; el caso de
      uso acumula el mensaje en un ValidationCollector.
    - email se compara en minúsculas (trim + lower).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from ....crosscutting.exceptions import ConflictError, NotFoundError, ValidationCollector
from ....domain.entities import EmployeeStatus

FIELD_FIRST_NAME = "first_name"
FIELD_LAST_NAME = "last_name"
FIELD_EMAIL = "email"
FIELD_PHONE = "phone"
FIELD_POSITION = "position"
FIELD_SALARY = "salary"
FIELD_HIRE_DATE = "hire_date"
FIELD_STATUS = "status"
FIELD_DEPARTMENT_ID = "department_id"

UPDATABLE_FIELDS = frozenset(
    {
        FIELD_FIRST_NAME,
        FIELD_LAST_NAME,
        FIELD_EMAIL,
        FIELD_PHONE,
        FIELD_POSITION,
        FIELD_SALARY,
        FIELD_HIRE_DATE,
        FIELD_STATUS,
        FIELD_DEPARTMENT_ID,
    }
)

SALARY_MAX = Decimal("99999999.99")
_CENTS = Decimal("0.01")

MSG_SALARY = "Salary must be a valid positive number"
MSG_HIRE_DATE = "Hire date must be a valid date"
MSG_STATUS = "Status must be one of: " + ", ".join(s.value for s in EmployeeStatus)


@dataclass(frozen=True)
class TextRule:
    field: str
    label: str
    max_length: int
    required: bool = True


TEXT_RULES = (
    TextRule(FIELD_FIRST_NAME, "First name", 50),
    TextRule(FIELD_LAST_NAME, "Last name", 50),
    TextRule(FIELD_EMAIL, "Email", 100),
    TextRule(FIELD_PHONE, "Phone", 20, required=False),
    TextRule(FIELD_POSITION, "Position", 100),
)
TEXT_RULES_BY_FIELD = {rule.field: rule for rule in TEXT_RULES}


def normalize_email(raw: str | None) -> str:
    return (raw or "").strip().lower()


def normalize_text(rule: TextRule, raw: str | None) -> Optional[str]:
    """strip(); email además a minúsculas; opcional vacío -> None."""
    if rule.field == FIELD_EMAIL:
        value = normalize_email(raw)
    else:
        value = (raw or "").strip()
    if not value and not rule.required:
        return None
    return value


def check_text(errors: ValidationCollector, rule: TextRule, value: Optional[str]) -> None:
    if not value:
        if rule.required:
            errors.add(rule.field, f"{rule.label} is required")
        return
    if len(value) > rule.max_length:
        errors.add(
            rule.field, f"{rule.label} must not exceed {rule.max_length} characters"
        )


def parse_salary(raw: Any) -> Optional[Decimal]:
    """'100000' | 100000 | 1234.5 -> Decimal('100000.00'); inválido -> None."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value < 0 or value > SALARY_MAX + _CENTS:
        return None
    # abs(): "-0" pasa el chequeo de signo y quedaría como -0.00.
    value = abs(value).quantize(_CENTS, rounding=ROUND_HALF_UP)
    if value > SALARY_MAX:
        return None
    return value


def parse_hire_date(raw: Any) -> Optional[date]:
    """Acepta date, 'YYYY-MM-DD' o datetime ISO (se conserva la fecha)."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_status(raw: Any) -> Optional[EmployeeStatus]:
    if isinstance(raw, EmployeeStatus):
        return raw
    try:
        return EmployeeStatus(raw)
    except ValueError:
        return None


def employee_not_found(employee_id: UUID | str) -> NotFoundError:
    return NotFoundError(
        f"Employee with id {employee_id} not found",
        details={"employee_id": str(employee_id)},
    )


def employee_email_conflict(email: str) -> ConflictError:
    return ConflictError(
        f'Employee with email "{email}" already exists',
        details={FIELD_EMAIL: email},
    )
