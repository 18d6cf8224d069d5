"""PostgreSQL implementation of DocumentStore.

Documents live in a single table keyed by the string form of their
hierarchical key. Document data is stored as JSONB; filters and sort
orders are evaluated on the JSONB values, which compare numbers
numerically and encoded datetimes chronologically.
"""

import re
from typing import Any

import asyncpg

from clientele.datastore import codec
from clientele.datastore.errors import (
    ConnectionError,
    DocumentConflictError,
    DocumentNotFoundError,
)
from clientele.datastore.keys import Key
from clientele.datastore.models import RawEntity, SaveMethod
from clientele.datastore.pool import PostgresPool
from clientele.datastore.query import Query
from clientele.datastore.store import DocumentStore
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


class PostgresDocumentStore(DocumentStore):
    """PostgreSQL implementation of DocumentStore.

    Insertion order is tracked with a sequence column and used to break
    ties between documents with equal sort values.
    """

    def __init__(self, pool: PostgresPool, table_name: str = "documents") -> None:
        """Initialize PostgreSQL document store.

        Args:
            pool: Connection pool
            table_name: Name of the documents table
        """
        if not _IDENTIFIER.match(table_name):
            raise ValueError(f"Invalid table name: {table_name}")
        self._pool = pool
        self._table = table_name

    async def ensure_schema(self) -> None:
        """Create the documents table and indexes if missing."""
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self._table} (
                        key TEXT PRIMARY KEY,
                        kind TEXT NOT NULL,
                        data JSONB NOT NULL,
                        seq BIGSERIAL NOT NULL
                    );
                    CREATE INDEX IF NOT EXISTS {self._table}_kind_idx
                        ON {self._table} (kind, key text_pattern_ops);
                    """  # noqa: S608
                )
        except asyncpg.PostgresError as e:
            logger.error("postgres_schema_error", table=self._table, error=str(e))
            raise ConnectionError(f"Failed to create schema: {e}", cause=e) from e

    async def get(self, key: Key) -> RawEntity | None:
        """Get the document at a key, or None."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT data FROM {self._table} WHERE key = $1",  # noqa: S608
                    str(key),
                )
        except asyncpg.PostgresError as e:
            logger.error("postgres_get_error", key=str(key), error=str(e))
            raise ConnectionError(f"Failed to get document: {e}", cause=e) from e

        if row is None:
            return None
        return RawEntity(key=key, data=codec.decode(row["data"]))

    async def save(self, key: Key, data: dict[str, Any], method: SaveMethod) -> None:
        """Write a document with insert or update semantics."""
        encoded = codec.encode(data)
        try:
            async with self._pool.acquire() as conn:
                if method == SaveMethod.INSERT:
                    try:
                        await conn.execute(
                            f"""
                            INSERT INTO {self._table} (key, kind, data)
                            VALUES ($1, $2, $3::jsonb)
                            """,  # noqa: S608
                            str(key),
                            key.kind,
                            encoded,
                        )
                    except asyncpg.UniqueViolationError as e:
                        raise DocumentConflictError(
                            f"Document already exists: {key}", cause=e
                        ) from e
                else:
                    status = await conn.execute(
                        f"UPDATE {self._table} SET data = $2::jsonb WHERE key = $1",  # noqa: S608
                        str(key),
                        encoded,
                    )
                    if status == "UPDATE 0":
                        raise DocumentNotFoundError(f"Document not found: {key}")
        except asyncpg.PostgresError as e:
            logger.error(
                "postgres_save_error", key=str(key), method=method.value, error=str(e)
            )
            raise ConnectionError(f"Failed to save document: {e}", cause=e) from e

    async def delete(self, key: Key) -> None:
        """Delete the document at a key."""
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    f"DELETE FROM {self._table} WHERE key = $1",  # noqa: S608
                    str(key),
                )
        except asyncpg.PostgresError as e:
            logger.error("postgres_delete_error", key=str(key), error=str(e))
            raise ConnectionError(f"Failed to delete document: {e}", cause=e) from e

    async def run_query(self, query: Query) -> list[RawEntity]:
        """Run a query and return matching documents in sort order."""
        query.validate()
        sql, params = build_select(self._table, query)

        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(sql, *params)
        except asyncpg.PostgresError as e:
            logger.error("postgres_query_error", kind=query.kind, error=str(e))
            raise ConnectionError(f"Failed to run query: {e}", cause=e) from e

        return [
            RawEntity(key=Key.parse(row["key"]), data=codec.decode(row["data"]))
            for row in rows
        ]


def build_select(table: str, query: Query) -> tuple[str, list[Any]]:
    """Translate a Query into SQL text and positional parameters.

    Property names are passed as parameters, never interpolated.
    """
    params: list[Any] = [query.kind]
    conditions = ["kind = $1"]

    if query.ancestor is not None:
        params.append(f"{query.ancestor}/")
        conditions.append(f"starts_with(key, ${len(params)})")

    for property_filter in query.filters:
        params.append(property_filter.property)
        name = f"${len(params)}::text"
        params.append(codec.encode(property_filter.value))
        value = f"${len(params)}::jsonb"
        conditions.append(
            f"jsonb_typeof(data -> {name}) = jsonb_typeof({value}) "
            f"AND (data -> {name}) {property_filter.op} {value}"
        )

    ordering = []
    for order in query.orders:
        params.append(order.property)
        name = f"${len(params)}::text"
        conditions.append(f"COALESCE(jsonb_typeof(data -> {name}), 'null') <> 'null'")
        ordering.append(f"(data -> {name}) {'DESC' if order.descending else 'ASC'}")
    ordering.append("seq ASC")

    sql = (
        f"SELECT key, data FROM {table} "  # noqa: S608
        f"WHERE {' AND '.join(conditions)} "
        f"ORDER BY {', '.join(ordering)}"
    )
    return sql, params
