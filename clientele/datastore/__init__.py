"""Hierarchical document store: keys, queries and backends."""

from clientele.datastore.errors import (
    ConnectionError,
    DocumentConflictError,
    DocumentNotFoundError,
    DocumentStoreError,
)
from clientele.datastore.keys import Key, PathElement
from clientele.datastore.models import RawEntity, SaveMethod
from clientele.datastore.query import PropertyFilter, PropertyOrder, Query
from clientele.datastore.store import DocumentStore

__all__ = [
    # Keys
    "Key",
    "PathElement",
    # Queries
    "Query",
    "PropertyFilter",
    "PropertyOrder",
    # Records
    "RawEntity",
    "SaveMethod",
    # Store
    "DocumentStore",
    # Errors
    "DocumentStoreError",
    "ConnectionError",
    "DocumentConflictError",
    "DocumentNotFoundError",
]
