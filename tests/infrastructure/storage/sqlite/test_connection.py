"""Unit tests for SQLite connection pool."""

import asyncio
from pathlib import Path
from unittest.mock import patch

import aiosqlite
import pytest

import stockflow.infrastructure.storage.sqlite.connection as conn_module
from stockflow.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

INSERT_PRODUCT = "INSERT INTO products (sku, name, created_at, updated_at) VALUES (?, ?, ?, ?)"


async def _count_products(pool: ConnectionPool, sku: str) -> int:
    async with pool.acquire() as conn:
        cursor = await conn.execute("SELECT COUNT(*) FROM products WHERE sku = ?", (sku,))
        return (await cursor.fetchone())[0]


class TestConnectionPoolInit:
    """Tests for ConnectionPool initialization."""

    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.db_path == temp_db_path
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False

    async def test_initialize_creates_directory(self, tmp_path: Path):
        """Initialize creates database directory if not exists."""
        db_path = tmp_path / "subdir" / "nested" / "test.db"
        pool = ConnectionPool(db_path, pool_size=1)

        await pool.initialize()
        assert db_path.parent.exists()
        await pool.close()

    async def test_initialize_idempotent(self, temp_db_path: Path):
        """Multiple initialize calls are safe."""
        pool = ConnectionPool(temp_db_path, pool_size=2)

        await pool.initialize()
        await pool.initialize()

        assert len(pool._connections) == 2
        await pool.close()


class TestConnectionSettings:
    async def test_wal_and_foreign_keys(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        conn = await pool._create_connection()

        cursor = await conn.execute("PRAGMA journal_mode")
        assert (await cursor.fetchone())[0].lower() == "wal"
        cursor = await conn.execute("PRAGMA foreign_keys")
        assert (await cursor.fetchone())[0] == 1
        assert conn.row_factory == aiosqlite.Row
        await conn.close()


class TestConnectionPoolAcquire:
    async def test_returns_connection_on_exception(self, temp_db_path: Path):
        """Connection is returned even if exception occurs."""
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.initialize()

        with pytest.raises(ValueError):
            async with pool.acquire() as _conn:
                raise ValueError("Test error")

        assert pool._pool.qsize() == 1
        await pool.close()

    async def test_blocks_when_pool_exhausted(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1)
        await pool.initialize()

        async with pool.acquire() as _conn1:
            with pytest.raises(asyncio.TimeoutError):
                async with asyncio.timeout(0.1):
                    async with pool.acquire() as _conn2:
                        pass

        await pool.close()


class TestConnectionPoolTransaction:
    async def test_commits_on_success(self, migrated_db: Path):
        pool = ConnectionPool(migrated_db, pool_size=1)

        async with pool.transaction() as conn:
            await conn.execute(INSERT_PRODUCT, ("TX-1", "Committed", "2025-01-01", "2025-01-01"))

        assert await _count_products(pool, "TX-1") == 1
        await pool.close()

    @pytest.mark.parametrize("immediate", [False, True])
    async def test_rolls_back_on_exception(self, migrated_db: Path, immediate: bool):
        pool = ConnectionPool(migrated_db, pool_size=1)

        with pytest.raises(ValueError):
            async with pool.transaction(immediate=immediate) as conn:
                await conn.execute(
                    INSERT_PRODUCT, ("TX-2", "Rolled back", "2025-01-01", "2025-01-01")
                )
                raise ValueError("Force rollback")

        assert await _count_products(pool, "TX-2") == 0
        await pool.close()

    async def test_rolls_back_on_cancellation(self, migrated_db: Path):
        pool = ConnectionPool(migrated_db, pool_size=1)
        inserted = asyncio.Event()

        async def writer():
            async with pool.transaction(immediate=True) as conn:
                await conn.execute(
                    INSERT_PRODUCT, ("TX-3", "Cancelled", "2025-01-01", "2025-01-01")
                )
                inserted.set()
                await asyncio.sleep(10)

        task = asyncio.create_task(writer())
        await inserted.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert await _count_products(pool, "TX-3") == 0
        await pool.close()


class TestGlobalPool:
    async def test_get_pool_returns_same_instance(self, mock_settings):
        conn_module._pool = None

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            pool1 = await get_pool()
            pool2 = await get_pool()

            assert pool1 is pool2
            assert pool1.db_path == mock_settings.storage.db_path

            await close_pool()
            assert conn_module._pool is None

    async def test_close_pool_safe_when_none(self):
        conn_module._pool = None
        await close_pool()

    async def test_get_transaction_and_connection(self, sqlite_pool):
        async with get_transaction() as conn:
            await conn.execute(INSERT_PRODUCT, ("TX-4", "Global", "2025-01-01", "2025-01-01"))

        async with get_connection() as conn:
            cursor = await conn.execute("SELECT name FROM products WHERE sku = ?", ("TX-4",))
            row = await cursor.fetchone()
            assert row["name"] == "Global"
