"""DocumentStore abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

from clientele.datastore.keys import Key
from clientele.datastore.models import RawEntity, SaveMethod
from clientele.datastore.query import Query


class DocumentStore(ABC):
    """Abstract interface for a hierarchical key-value document store.

    Documents are addressed by hierarchical keys and hold free-form
    attribute maps. Queries select documents by kind, ancestor,
    property filters and sort orders.
    """

    @abstractmethod
    async def get(self, key: Key) -> RawEntity | None:
        """Get the document at a key, or None."""
        pass

    @abstractmethod
    async def save(self, key: Key, data: dict[str, Any], method: SaveMethod) -> None:
        """Write a document with insert or update semantics.

        Raises:
            DocumentConflictError: On insert when the key is occupied
            DocumentNotFoundError: On update when the key is empty
        """
        pass

    @abstractmethod
    async def delete(self, key: Key) -> None:
        """Delete the document at a key. Deleting a missing key is a no-op."""
        pass

    @abstractmethod
    async def run_query(self, query: Query) -> list[RawEntity]:
        """Run a query and return matching documents in sort order.

        Raises:
            InvalidQueryError: If the query violates store constraints
        """
        pass
