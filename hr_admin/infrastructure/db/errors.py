"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del Pool/Conectividad

Responsabilidades:
  - Dar semántica clara: "no inicializado", "ya inicializado".
  - Son StoreError: si llegan a un caso de uso se traducen a Internal.
===============================================================================
"""

from ...domain.repositories import StoreError


class DatabasePoolError(StoreError):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """Se intentó inicializar el pool más de una vez."""


class PoolNotInitializedError(DatabasePoolError):
    """Se intentó usar el pool sin init_pool()."""
