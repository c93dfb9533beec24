"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure a deterministic test environment (env vars BEFORE app imports)
  - Reset cached settings / container singletons per test
  - Provide in-memory repositories and an ADMIN identity

Notes:
  - Fixtures are auto-discovered by pytest
  - Argon2 runs with the minimum allowed cost to keep tests fast
"""

import os
import sys
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_JWT_SECRET = "test-secret-with-more-than-32-characters!!"

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("PASSWORD_HASH_COST", "10")
os.environ.setdefault("PASSWORD_HASH_MEMORY_KIB", "64")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from hr_admin.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from hr_admin import container  # noqa: E402
from hr_admin.identity.principal import Identity  # noqa: E402
from hr_admin.identity.users import UserRole  # noqa: E402
from hr_admin.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryDepartmentRepository,
    InMemoryEmployeeRepository,
    InMemoryUserRepository,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _fresh_state():
    """R: Settings + singletons (in-memory stores) fresh for every test."""
    app_config.get_settings.cache_clear()
    container.reset_container()
    yield
    app_config.get_settings.cache_clear()
    container.reset_container()


# ============================================================================
# Identity / Repositories
# ============================================================================


@pytest.fixture
def admin_identity() -> Identity:
    return Identity(user_id=uuid4(), email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def department_repo() -> InMemoryDepartmentRepository:
    return InMemoryDepartmentRepository()


@pytest.fixture
def employee_repo() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()
