"""Document store backends."""

from clientele.datastore.stores.inmemory import InMemoryDocumentStore
from clientele.datastore.stores.postgres import PostgresDocumentStore

__all__ = [
    "InMemoryDocumentStore",
    "PostgresDocumentStore",
]
