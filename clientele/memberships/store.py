"""Membership persistence under customer keys."""

from collections.abc import Callable, Mapping
from typing import Any

from clientele.customers.store import customer_key
from clientele.datastore.keys import Key
from clientele.datastore.query import Query
from clientele.entities import (
    METADATA_CREATED,
    Entity,
    EntityStore,
    preserved_fields,
    writable_attributes,
)
from clientele.errors import MembershipNotFoundError
from clientele.ids import new_id
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

MEMBERSHIP_KIND = "Membership"


def membership_key(customer_id: str, membership_id: str) -> Key:
    """Key of a membership document."""
    return customer_key(customer_id).child(MEMBERSHIP_KIND, membership_id)


def _not_found(
    customer_id: str, membership_id: str
) -> Callable[[Key], MembershipNotFoundError]:
    return lambda key: MembershipNotFoundError(customer_id, membership_id, key=key)


class MembershipStore:
    """CRUD for memberships, children of exactly one customer.

    The parent customer is not checked here; see clientele.access.
    """

    def __init__(
        self,
        entities: EntityStore,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._entities = entities
        self._id_factory = id_factory

    async def create(self, customer_id: str, params: Mapping[str, Any]) -> Entity:
        """Create a membership for a customer."""
        membership_id = self._id_factory()
        membership = await self._entities.create(
            membership_key(customer_id, membership_id), writable_attributes(params)
        )
        logger.info(
            "membership_created",
            customer_id=customer_id,
            membership_id=membership_id,
        )
        return membership

    async def find(
        self, customer_id: str, supplier_id: str | None = None
    ) -> list[Entity]:
        """List a customer's memberships in creation order.

        Args:
            customer_id: Owning customer
            supplier_id: Only return memberships at this supplier
        """
        query = Query(MEMBERSHIP_KIND).has_ancestor(customer_key(customer_id))
        if supplier_id is not None:
            query.filter("supplier_id", "=", supplier_id)
        query.order(METADATA_CREATED)
        return await self._entities.run_query(query)

    async def get(self, customer_id: str, membership_id: str) -> Entity:
        """Get a membership.

        Raises:
            MembershipNotFoundError: If the membership does not exist
        """
        return await self._entities.get(
            membership_key(customer_id, membership_id),
            not_found=_not_found(customer_id, membership_id),
        )

    async def update(
        self, customer_id: str, membership_id: str, params: Mapping[str, Any]
    ) -> Entity:
        """Replace a membership's attributes, keeping its creation time.

        Raises:
            MembershipNotFoundError: If the membership does not exist
        """
        key = membership_key(customer_id, membership_id)
        existing = await self._entities.get_raw(
            key, not_found=_not_found(customer_id, membership_id)
        )

        attributes = preserved_fields(existing, METADATA_CREATED)
        attributes.update(writable_attributes(params))

        membership = await self._entities.update(key, attributes)
        logger.info(
            "membership_updated",
            customer_id=customer_id,
            membership_id=membership_id,
        )
        return membership

    async def delete(self, customer_id: str, membership_id: str) -> None:
        """Delete a membership.

        Raises:
            MembershipNotFoundError: If the membership does not exist
        """
        key = membership_key(customer_id, membership_id)
        await self._entities.get_raw(key, not_found=_not_found(customer_id, membership_id))
        await self._entities.delete(key)
        logger.info(
            "membership_deleted",
            customer_id=customer_id,
            membership_id=membership_id,
        )
