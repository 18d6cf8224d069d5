"""Connection pool for the PostgreSQL document store."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from clientele.config.models.storage import StorageConfig
from clientele.datastore.errors import ConnectionError
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

DATABASE_URL_ENV = "CLIENTELE_DATABASE_URL"


def resolve_dsn(configured: str | None = None) -> str:
    """Return the configured connection URL or the one from the environment."""
    dsn = configured or os.environ.get(DATABASE_URL_ENV)
    if not dsn:
        raise ValueError(
            f"PostgreSQL storage needs storage.connection_url or {DATABASE_URL_ENV}"
        )
    return dsn


class PostgresPool:
    """Lazily connected asyncpg pool shared by the document store."""

    def __init__(
        self,
        dsn: str,
        min_size: int = 5,
        max_size: int = 20,
        command_timeout: float = 60.0,
    ) -> None:
        if min_size > max_size:
            raise ValueError(
                f"min_size ({min_size}) must not exceed max_size ({max_size})"
            )
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_config(cls, storage: StorageConfig) -> "PostgresPool":
        return cls(
            dsn=resolve_dsn(storage.connection_url),
            min_size=storage.min_pool_size,
            max_size=storage.max_pool_size,
            command_timeout=storage.command_timeout,
        )

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> asyncpg.Pool:
        """Open the pool if needed and return it."""
        if self._pool is not None:
            return self._pool

        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except (OSError, asyncpg.PostgresError) as e:
            logger.error("document_pool_connection_failed", error=str(e))
            raise ConnectionError(f"Failed to connect to PostgreSQL: {e}", cause=e) from e

        logger.info(
            "document_pool_connected",
            min_size=self._min_size,
            max_size=self._max_size,
        )
        return self._pool

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("document_pool_closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Borrow a connection, connecting on first use."""
        pool = await self.connect()
        async with pool.acquire() as connection:
            yield connection
