"""Tests for the PostgreSQL connection pool wrapper."""

from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from clientele.config.models.storage import StorageConfig
from clientele.datastore import ConnectionError
from clientele.datastore.pool import DATABASE_URL_ENV, PostgresPool, resolve_dsn

DSN = "postgresql://clientele@localhost:5432/clientele"


@pytest.fixture
def fake_pool() -> MagicMock:
    pool = MagicMock()
    pool.close = AsyncMock()
    pool.acquire.return_value.__aenter__.return_value = "connection"
    return pool


@pytest.fixture
def create_pool(monkeypatch: pytest.MonkeyPatch, fake_pool: MagicMock) -> AsyncMock:
    create = AsyncMock(return_value=fake_pool)
    monkeypatch.setattr(asyncpg, "create_pool", create)
    return create


class TestResolveDsn:
    """Tests for connection URL resolution."""

    def test_configured_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATABASE_URL_ENV, "postgresql://env/db")
        assert resolve_dsn(DSN) == DSN

    def test_falls_back_to_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(DATABASE_URL_ENV, "postgresql://env/db")
        assert resolve_dsn(None) == "postgresql://env/db"

    def test_missing_url_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
        with pytest.raises(ValueError, match=DATABASE_URL_ENV):
            resolve_dsn(None)


class TestPostgresPool:
    """Tests for pool lifecycle."""

    def test_from_config(self) -> None:
        pool = PostgresPool.from_config(
            StorageConfig(
                backend="postgres",
                connection_url=DSN,
                min_pool_size=2,
                max_pool_size=4,
            )
        )

        assert not pool.is_connected

    def test_rejects_inverted_sizes(self) -> None:
        with pytest.raises(ValueError, match="min_size"):
            PostgresPool(DSN, min_size=10, max_size=2)

    @pytest.mark.asyncio
    async def test_connect_once(self, create_pool: AsyncMock, fake_pool: MagicMock) -> None:
        pool = PostgresPool(DSN, min_size=1, max_size=2, command_timeout=5.0)

        assert await pool.connect() is fake_pool
        assert await pool.connect() is fake_pool

        create_pool.assert_awaited_once_with(
            dsn=DSN, min_size=1, max_size=2, command_timeout=5.0
        )
        assert pool.is_connected

    @pytest.mark.asyncio
    async def test_acquire_connects_on_first_use(
        self, create_pool: AsyncMock
    ) -> None:
        pool = PostgresPool(DSN)

        async with pool.acquire() as connection:
            assert connection == "connection"

        create_pool.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_failure_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        refused = OSError("connection refused")
        monkeypatch.setattr(asyncpg, "create_pool", AsyncMock(side_effect=refused))
        pool = PostgresPool(DSN)

        with pytest.raises(ConnectionError) as exc_info:
            await pool.connect()

        assert exc_info.value.cause is refused
        assert not pool.is_connected

    @pytest.mark.asyncio
    async def test_close(self, create_pool: AsyncMock, fake_pool: MagicMock) -> None:
        pool = PostgresPool(DSN)
        await pool.connect()

        await pool.close()
        await pool.close()

        fake_pool.close.assert_awaited_once()
        assert not pool.is_connected
