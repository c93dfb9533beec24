# hr_admin/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Taxonomía de errores (agnóstica de HTTP)
===============================================================================

Objetivo
--------
Un vocabulario cerrado de fallas compartido por identity, application y api:
- error_code estable (machine-readable)
- message “humana” (sin filtrar secretos)
- details estructurados opcionales (ej: {"salary": ["..."]})
- is_operational: esperado/operacional vs inesperado (este último alerta)
- error_id para correlación con logs

| Kind         | code             | operational |
|--------------|------------------|-------------|
| INVALID      | VALIDATION_ERROR | sí          |
| UNAUTHORIZED | UNAUTHORIZED     | sí          |
| NOT_FOUND    | NOT_FOUND        | sí          |
| CONFLICT     | CONFLICT         | sí          |
| INTERNAL     | INTERNAL_ERROR   | no          |

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppError + subclases

Responsabilidades:
  - Estandarizar las fallas de reglas de negocio y autenticación
  - Preservar la causa original (original_error) solo para logs de operador

Colaboradores:
  - crosscutting/error_responses.py (render RFC7807 + status HTTP)
  - api/exception_handlers.py (logging por severidad)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar
from uuid import uuid4


class ErrorKind(str, Enum):
    """Conjunto cerrado de categorías de falla."""

    INVALID = "invalid"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorResponse:
    """Vista serializable de un AppError (sin causa original)."""

    error_code: str
    message: str
    error_id: str
    details: dict[str, Any] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }
        if self.details:
            data["details"] = self.details
        return data


class AppError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AppError

    Responsabilidades:
      - Base de la taxonomía: kind + error_code + message + details
      - Distinguir fallas operacionales (esperadas) de inesperadas

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
    error_code: ClassVar[str] = "INTERNAL_ERROR"
    is_operational: ClassVar[bool] = True

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_id: str | None = None,
        original_error: BaseException | None = None,
    ):
        self.message = message
        self.details = details
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code,
            message=self.message,
            error_id=self.error_id,
            details=self.details,
        )


class InvalidInputError(AppError):
    """Input malformado o fuera de rango. details = {campo: [mensajes]}."""

    kind = ErrorKind.INVALID
    error_code = "VALIDATION_ERROR"

    @classmethod
    def from_violations(cls, violations: dict[str, list[str]]) -> "InvalidInputError":
        """Un único error que enumera TODAS las violaciones (primera = mensaje)."""
        first_field = next(iter(violations))
        return cls(violations[first_field][0], details=dict(violations))


class UnauthorizedError(AppError):
    """Credenciales ausentes, inválidas o insuficientes."""

    kind = ErrorKind.UNAUTHORIZED
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized access", **kwargs: Any):
        super().__init__(message, **kwargs)


class NotFoundError(AppError):
    """La entidad referenciada no existe (o está soft-deleted)."""

    kind = ErrorKind.NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(AppError):
    """Colisión de unicidad o de estado."""

    kind = ErrorKind.CONFLICT
    error_code = "CONFLICT"


class InternalError(AppError):
    """Falla inesperada (persistencia, codec). Dispara alerta."""

    kind = ErrorKind.INTERNAL
    error_code = "INTERNAL_ERROR"
    is_operational = False

    def __init__(self, message: str = "Internal server error", **kwargs: Any):
        super().__init__(message, **kwargs)


class ValidationCollector:
    """
    Acumula violaciones por campo en orden de inserción.

    Uso:
        errors = ValidationCollector()
        errors.add("name", "Department name is required")
        errors.raise_if_any()
    """

    def __init__(self) -> None:
        self._violations: dict[str, list[str]] = {}

    def add(self, field_name: str, message: str) -> None:
        self._violations.setdefault(field_name, []).append(message)

    def __bool__(self) -> bool:
        return bool(self._violations)

    def raise_if_any(self) -> None:
        if self._violations:
            raise InvalidInputError.from_violations(self._violations)
