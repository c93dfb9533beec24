"""
Name: Database Pool Tests

Responsibilities:
  - Pool lifecycle (init, get, close)
  - Offline unit tests (no real DB)

Notes:
  - AsyncConnectionPool is mocked
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hr_admin.infrastructure.db import pool as db_pool
from hr_admin.infrastructure.db.errors import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from hr_admin.domain.repositories import StoreError


@pytest.fixture(autouse=True)
def _no_pool():
    db_pool._pool = None
    yield
    db_pool._pool = None


def _mock_pool() -> MagicMock:
    mock = MagicMock()
    mock.open = AsyncMock()
    mock.close = AsyncMock()
    return mock


@pytest.mark.unit
class TestPoolLifecycle:
    @pytest.mark.asyncio
    async def test_init_pool_opens_pool(self):
        with patch.object(db_pool, "AsyncConnectionPool") as MockPool:
            mock_pool = _mock_pool()
            MockPool.return_value = mock_pool

            result = await db_pool.init_pool(
                "postgresql://test", min_size=1, max_size=5, statement_timeout_ms=1000
            )

        assert result is mock_pool
        mock_pool.open.assert_awaited_once_with(wait=True)
        assert MockPool.call_args.kwargs["min_size"] == 1
        assert MockPool.call_args.kwargs["max_size"] == 5
        assert db_pool.get_pool() is mock_pool

    @pytest.mark.asyncio
    async def test_init_pool_twice_raises(self):
        with patch.object(db_pool, "AsyncConnectionPool") as MockPool:
            MockPool.return_value = _mock_pool()
            await db_pool.init_pool(
                "postgresql://test", min_size=1, max_size=5, statement_timeout_ms=0
            )

            with pytest.raises(PoolAlreadyInitializedError):
                await db_pool.init_pool(
                    "postgresql://test", min_size=1, max_size=5, statement_timeout_ms=0
                )

    def test_get_pool_without_init_raises(self):
        with pytest.raises(PoolNotInitializedError):
            db_pool.get_pool()

    def test_pool_errors_are_store_errors(self):
        assert issubclass(PoolNotInitializedError, StoreError)

    @pytest.mark.asyncio
    async def test_close_pool_is_idempotent(self):
        with patch.object(db_pool, "AsyncConnectionPool") as MockPool:
            mock_pool = _mock_pool()
            MockPool.return_value = mock_pool
            await db_pool.init_pool(
                "postgresql://test", min_size=1, max_size=5, statement_timeout_ms=0
            )

        await db_pool.close_pool()
        await db_pool.close_pool()

        mock_pool.close.assert_awaited_once()
        with pytest.raises(PoolNotInitializedError):
            db_pool.get_pool()


@pytest.mark.unit
class TestStatementTimeout:
    @pytest.mark.asyncio
    async def test_configure_sets_statement_timeout(self):
        conn = MagicMock()
        conn.execute = AsyncMock()
        conn.commit = AsyncMock()

        await db_pool._connection_configurator(1500)(conn)

        conn.execute.assert_awaited_once_with("SET statement_timeout = 1500")

    @pytest.mark.asyncio
    async def test_zero_timeout_leaves_connection_untouched(self):
        conn = MagicMock()
        conn.execute = AsyncMock()

        await db_pool._connection_configurator(0)(conn)

        conn.execute.assert_not_awaited()
