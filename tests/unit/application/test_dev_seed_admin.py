"""
Name: Dev Seed Admin Tests
"""

import pytest

from hr_admin.application.dev_seed_admin import ensure_dev_admin
from hr_admin.crosscutting.config import Settings
from hr_admin.identity.passwords import PasswordHasher

pytestmark = pytest.mark.unit


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(cost=10, memory_cost_kib=64)


def _settings(**overrides) -> Settings:
    values = dict(
        jwt_secret="s" * 32,
        app_env="development",
        dev_seed_admin=True,
        dev_seed_admin_email=" Admin@Local ",
        dev_seed_admin_password="admin-password",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_disabled_seed_does_nothing(user_repo, hasher):
    result = await ensure_dev_admin(
        _settings(dev_seed_admin=False), users=user_repo, hasher=hasher
    )

    assert result is None
    assert await user_repo.find_by_email("admin@local") is None


@pytest.mark.asyncio
async def test_seed_creates_admin_once(user_repo, hasher):
    first = await ensure_dev_admin(_settings(), users=user_repo, hasher=hasher)
    second = await ensure_dev_admin(_settings(), users=user_repo, hasher=hasher)

    assert first == second
    user = await user_repo.find_by_email("admin@local")
    assert user.role.value == "ADMIN"
    assert hasher.compare("admin-password", user.password_hash)


@pytest.mark.asyncio
async def test_seed_refuses_production(user_repo, hasher):
    with pytest.raises(RuntimeError, match="production"):
        await ensure_dev_admin(
            _settings(app_env="production"), users=user_repo, hasher=hasher
        )


@pytest.mark.asyncio
async def test_seed_requires_password(user_repo, hasher):
    with pytest.raises(RuntimeError, match="DEV_SEED_ADMIN_PASSWORD"):
        await ensure_dev_admin(
            _settings(dev_seed_admin_password=""), users=user_repo, hasher=hasher
        )
