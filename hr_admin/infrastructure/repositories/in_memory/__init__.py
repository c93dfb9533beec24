"""Adapters in-memory del Entity Store Contract (tests / desarrollo local)."""

from .departments import InMemoryDepartmentRepository
from .employees import InMemoryEmployeeRepository
from .users import InMemoryUserRepository

__all__ = [
    "InMemoryDepartmentRepository",
    "InMemoryEmployeeRepository",
    "InMemoryUserRepository",
]
