"""
===============================================================================
TARJETA CRC — application/usecases/_store.py
===============================================================================

Módulo:
    Traducción de errores del store -> taxonomía

Responsabilidades:
    - DuplicateKeyError -> ConflictError (si el caso de uso sabe construirlo).
    - Cualquier otro StoreError -> InternalError (causa preservada para logs).

Colaboradores:
    - domain/repositories.StoreError, DuplicateKeyError, wrap_store_error
    - application/usecases/* (envuelven cada llamada al store)
===============================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator

from ...crosscutting.exceptions import AppError
from ...domain.repositories import DuplicateKeyError, StoreError, wrap_store_error


@contextmanager
def store_guard(
    operation: str,
    *,
    on_duplicate: Callable[[DuplicateKeyError], AppError] | None = None,
) -> Iterator[None]:
    """
    Uso:
        with store_guard("department create", on_duplicate=lambda e: conflict(name)):
            created = await repo.create(department)
    """
    try:
        yield
    except DuplicateKeyError as exc:
        if on_duplicate is None:
            raise wrap_store_error(exc, operation) from exc
        raise on_duplicate(exc) from exc
    except StoreError as exc:
        raise wrap_store_error(exc, operation) from exc
