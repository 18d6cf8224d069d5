"""Generic entity CRUD over a DocumentStore."""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from clientele.datastore.keys import Key
from clientele.datastore.models import RawEntity, SaveMethod
from clientele.datastore.query import Query
from clientele.datastore.store import DocumentStore
from clientele.entities.models import (
    METADATA_CREATED,
    METADATA_UPDATED,
    Entity,
    build_model,
)
from clientele.errors import EntityNotFoundError
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

NotFoundFactory = Callable[[Key], EntityNotFoundError]


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


def _entity_not_found(key: Key) -> EntityNotFoundError:
    return EntityNotFoundError(key=key)


class EntityStore:
    """Entity persistence on top of a hierarchical document store.

    Stamps creation (and optionally update) metadata on write and turns
    raw documents into public models on read. Updates overwrite the
    stored document; callers carry over internal fields themselves.
    """

    def __init__(
        self,
        documents: DocumentStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._documents = documents
        self._clock = clock

    async def create(
        self,
        key: Key,
        attributes: Mapping[str, Any],
        *,
        track_updated: bool = False,
    ) -> Entity:
        """Insert a new entity.

        Raises:
            DocumentConflictError: If the key is already occupied
        """
        now = self._clock()
        data = dict(attributes)
        data[METADATA_CREATED] = now
        if track_updated:
            data[METADATA_UPDATED] = now

        await self._documents.save(key, data, SaveMethod.INSERT)
        logger.debug("entity_created", key=str(key))
        return build_model(RawEntity(key=key, data=data))

    async def get_raw(
        self, key: Key, *, not_found: NotFoundFactory = _entity_not_found
    ) -> RawEntity:
        """Get the unfiltered document at a key.

        Raises:
            EntityNotFoundError: If nothing exists at the key
        """
        raw = await self._documents.get(key)
        if raw is None:
            raise not_found(key)
        return raw

    async def get(
        self, key: Key, *, not_found: NotFoundFactory = _entity_not_found
    ) -> Entity:
        """Get the public model of the entity at a key.

        Raises:
            EntityNotFoundError: If nothing exists at the key
        """
        return build_model(await self.get_raw(key, not_found=not_found))

    async def update(
        self,
        key: Key,
        attributes: Mapping[str, Any],
        *,
        track_updated: bool = False,
    ) -> Entity:
        """Overwrite an existing entity.

        Raises:
            DocumentNotFoundError: If nothing exists at the key
        """
        data = dict(attributes)
        if track_updated:
            data[METADATA_UPDATED] = self._clock()

        await self._documents.save(key, data, SaveMethod.UPDATE)
        logger.debug("entity_updated", key=str(key))
        return build_model(RawEntity(key=key, data=data))

    async def delete(self, key: Key) -> None:
        """Delete the entity at a key."""
        await self._documents.delete(key)
        logger.debug("entity_deleted", key=str(key))

    async def run_query_raw(self, query: Query) -> list[RawEntity]:
        """Run a query and return unfiltered documents."""
        return await self._documents.run_query(query)

    async def run_query(self, query: Query) -> list[Entity]:
        """Run a query and return public models."""
        return [build_model(raw) for raw in await self.run_query_raw(query)]
