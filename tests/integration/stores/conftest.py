"""Pytest fixtures for store integration tests.

Tests run against the PostgreSQL database named by TEST_DATABASE_URL and
skip gracefully when it is unset or unreachable.
"""

import os
from collections.abc import AsyncIterator
from uuid import uuid4

import pytest
import pytest_asyncio

from clientele.datastore import ConnectionError
from clientele.datastore.pool import PostgresPool
from clientele.datastore.stores.postgres import PostgresDocumentStore


@pytest.fixture(scope="session")
def postgres_dsn() -> str:
    """Get PostgreSQL DSN for tests."""
    dsn = os.environ.get("TEST_DATABASE_URL")
    if not dsn:
        pytest.skip("PostgreSQL not configured (set TEST_DATABASE_URL)")
    return dsn


@pytest_asyncio.fixture(scope="function")
async def postgres_pool(postgres_dsn: str) -> AsyncIterator[PostgresPool]:
    """Create PostgreSQL connection pool for tests.

    Skips tests if PostgreSQL is not available.
    Uses function scope to avoid event loop issues across tests.
    """
    pool = PostgresPool(dsn=postgres_dsn, min_size=1, max_size=5)
    try:
        await pool.connect()
    except ConnectionError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    yield pool

    await pool.close()


@pytest_asyncio.fixture
async def postgres_documents(
    postgres_pool: PostgresPool,
) -> AsyncIterator[PostgresDocumentStore]:
    """Document store on a throwaway table."""
    table = f"documents_test_{uuid4().hex[:12]}"
    store = PostgresDocumentStore(postgres_pool, table_name=table)
    await store.ensure_schema()

    yield store

    async with postgres_pool.acquire() as conn:
        await conn.execute(f"DROP TABLE IF EXISTS {table}")
