"""Adapters PostgreSQL (psycopg 3, pool async) del Entity Store Contract."""

from .departments import PostgresDepartmentRepository
from .employees import PostgresEmployeeRepository
from .users import PostgresUserRepository

__all__ = [
    "PostgresDepartmentRepository",
    "PostgresEmployeeRepository",
    "PostgresUserRepository",
]
