"""Product price adjustment persistence under memberships.

Adjustments are grandchildren of a customer:

    Customer/{c}/Membership/{m}/CustomerProductPriceAdjustment/{a}

so all adjustments of a customer, across memberships, can be read with
one ancestor query.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from clientele.customers.store import customer_key
from clientele.datastore.codec import as_utc
from clientele.datastore.keys import Key
from clientele.datastore.query import Query
from clientele.entities import (
    METADATA_CREATED,
    Entity,
    EntityStore,
    build_model,
    preserved_fields,
    writable_attributes,
)
from clientele.errors import EntityNotFoundError
from clientele.ids import new_id
from clientele.memberships.store import MEMBERSHIP_KIND, membership_key
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

ADJUSTMENT_KIND = "CustomerProductPriceAdjustment"


def adjustment_key(customer_id: str, membership_id: str, adjustment_id: str) -> Key:
    """Key of a product price adjustment document."""
    return membership_key(customer_id, membership_id).child(ADJUSTMENT_KIND, adjustment_id)


def _not_found(adjustment_id: str) -> Callable[[Key], EntityNotFoundError]:
    return lambda key: EntityNotFoundError(
        f'Product price adjustment "{adjustment_id}" not found.', key=key
    )


class ProductPriceAdjustmentStore:
    """CRUD and date queries for customer product price adjustments."""

    def __init__(
        self,
        entities: EntityStore,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._entities = entities
        self._id_factory = id_factory

    async def create(
        self, customer_id: str, membership_id: str, params: Mapping[str, Any]
    ) -> Entity:
        """Create an adjustment under a membership."""
        adjustment_id = self._id_factory()
        adjustment = await self._entities.create(
            adjustment_key(customer_id, membership_id, adjustment_id),
            writable_attributes(params),
            track_updated=True,
        )
        logger.info(
            "adjustment_created",
            customer_id=customer_id,
            membership_id=membership_id,
            adjustment_id=adjustment_id,
        )
        return adjustment

    async def get(
        self, customer_id: str, membership_id: str, adjustment_id: str
    ) -> Entity:
        """Get an adjustment.

        Raises:
            EntityNotFoundError: If the adjustment does not exist
        """
        return await self._entities.get(
            adjustment_key(customer_id, membership_id, adjustment_id),
            not_found=_not_found(adjustment_id),
        )

    async def find(
        self,
        customer_id: str,
        membership_id: str,
        linked_product_id: str | None = None,
    ) -> list[Entity]:
        """List a membership's adjustments in creation order.

        Args:
            customer_id: Owning customer
            membership_id: Owning membership
            linked_product_id: Only return adjustments of this product
        """
        query = Query(ADJUSTMENT_KIND).has_ancestor(
            membership_key(customer_id, membership_id)
        )
        if linked_product_id is not None:
            query.filter("linked_product_id", "=", linked_product_id)
        query.order(METADATA_CREATED)
        return await self._entities.run_query(query)

    async def update(
        self,
        customer_id: str,
        membership_id: str,
        adjustment_id: str,
        params: Mapping[str, Any],
    ) -> Entity:
        """Replace an adjustment's attributes.

        The creation time is kept and the update time refreshed.

        Raises:
            EntityNotFoundError: If the adjustment does not exist
        """
        key = adjustment_key(customer_id, membership_id, adjustment_id)
        existing = await self._entities.get_raw(key, not_found=_not_found(adjustment_id))

        attributes = preserved_fields(existing, METADATA_CREATED)
        attributes.update(writable_attributes(params))

        adjustment = await self._entities.update(key, attributes, track_updated=True)
        logger.info(
            "adjustment_updated",
            customer_id=customer_id,
            membership_id=membership_id,
            adjustment_id=adjustment_id,
        )
        return adjustment

    async def delete(
        self, customer_id: str, membership_id: str, adjustment_id: str
    ) -> None:
        """Delete an adjustment.

        Raises:
            EntityNotFoundError: If the adjustment does not exist
        """
        key = adjustment_key(customer_id, membership_id, adjustment_id)
        await self._entities.get_raw(key, not_found=_not_found(adjustment_id))
        await self._entities.delete(key)
        logger.info(
            "adjustment_deleted",
            customer_id=customer_id,
            membership_id=membership_id,
            adjustment_id=adjustment_id,
        )

    async def find_active_for_customer(
        self, customer_id: str, date: datetime
    ) -> list[Entity]:
        """List adjustments of a customer that apply at a date.

        An adjustment applies when start_date <= date and its end_date is
        unset or >= date. The store can only filter on one inequality, so
        the start bound is queried and the end bound checked here.
        Results are ordered by start_date then creation and carry the
        id of their membership.
        """
        date = as_utc(date)
        query = (
            Query(ADJUSTMENT_KIND)
            .has_ancestor(customer_key(customer_id))
            .filter("start_date", "<=", date)
            .order("start_date")
            .order(METADATA_CREATED)
        )

        active: list[Entity] = []
        for raw in await self._entities.run_query_raw(query):
            end_date = raw.data.get("end_date")
            if end_date is not None and as_utc(end_date) < date:
                continue
            adjustment = build_model(raw)
            adjustment["membership_id"] = raw.key.ancestor_id(MEMBERSHIP_KIND)
            active.append(adjustment)
        return active
