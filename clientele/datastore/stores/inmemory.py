"""In-memory implementation of DocumentStore."""

import copy
from typing import Any

from clientele.datastore import codec
from clientele.datastore.errors import DocumentConflictError, DocumentNotFoundError
from clientele.datastore.keys import Key
from clientele.datastore.models import RawEntity, SaveMethod
from clientele.datastore.query import Query
from clientele.datastore.store import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation of DocumentStore for testing and development.

    Documents are copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._documents: dict[Key, dict[str, Any]] = {}

    async def get(self, key: Key) -> RawEntity | None:
        """Get the document at a key, or None."""
        data = self._documents.get(key)
        if data is None:
            return None
        return RawEntity(key=key, data=copy.deepcopy(data))

    async def save(self, key: Key, data: dict[str, Any], method: SaveMethod) -> None:
        """Write a document with insert or update semantics.

        Datetimes are stored in UTC, naive ones taken as UTC.
        """
        exists = key in self._documents
        if method == SaveMethod.INSERT and exists:
            raise DocumentConflictError(f"Document already exists: {key}")
        if method == SaveMethod.UPDATE and not exists:
            raise DocumentNotFoundError(f"Document not found: {key}")
        self._documents[key] = copy.deepcopy(codec.normalize(data))

    async def delete(self, key: Key) -> None:
        """Delete the document at a key."""
        self._documents.pop(key, None)

    async def run_query(self, query: Query) -> list[RawEntity]:
        """Run a query against all stored documents.

        Documents lacking a sorted property are excluded. Documents with
        equal sort values keep insertion order.
        """
        query.validate()

        matches = [
            (key, data)
            for key, data in self._documents.items()
            if query.matches(key, data)
            and all(data.get(order.property) is not None for order in query.orders)
        ]

        # Stable sorts applied from the least to the most significant order
        for order in reversed(query.orders):
            matches.sort(
                key=lambda item, prop=order.property: item[1][prop],
                reverse=order.descending,
            )

        return [RawEntity(key=key, data=copy.deepcopy(data)) for key, data in matches]

    def clear(self) -> None:
        """Remove all documents."""
        self._documents.clear()
