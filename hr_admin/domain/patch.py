"""
===============================================================================
TARJETA CRC — domain/patch.py
===============================================================================

Módulo:
    Valores de actualización parcial (absent | Present(value))

Responsabilidades:
    - Representar un update parcial como Mapping[campo -> Present(valor)].
    - Un campo AUSENTE no es clave del mapping ("no tocar").
    - Present(None) significa "limpiar el valor" (ej: desasignar departamento).

Colaboradores:
    - application/usecases/*/update_*.py (consumen el patch)
    - interfaces/api/http/schemas/* (construyen el patch desde model_fields_set)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Present(Generic[T]):
    """Campo presente en el update (el valor puede ser None = limpiar)."""

    value: T


Patch = Mapping[str, Present[Any]]


def make_patch(**values: Any) -> dict[str, Present[Any]]:
    """Atajo: make_patch(name="X", description=None) -> {name: Present("X"), ...}."""
    return {key: Present(value) for key, value in values.items()}


def unknown_fields(patch: Patch, allowed: frozenset[str]) -> list[str]:
    return sorted(key for key in patch if key not in allowed)
