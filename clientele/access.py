"""Ownership checks for nested customer resources.

The membership and adjustment stores never look at their parent
entities. Callers working on a customer's memberships verify the
chain here first.
"""

import asyncio

from clientele.customers.store import CustomerStore
from clientele.entities import Entity
from clientele.errors import CustomerNotFoundError
from clientele.memberships.store import MembershipStore


async def verify_customer(customers: CustomerStore, customer_id: str) -> Entity:
    """Return the customer, raising CustomerNotFoundError if missing."""
    return await customers.get(customer_id)


async def verify_customer_membership(
    customers: CustomerStore,
    memberships: MembershipStore,
    customer_id: str,
    membership_id: str,
) -> tuple[Entity, Entity]:
    """Return (customer, membership) after checking both exist.

    Both are fetched concurrently. A missing customer is reported ahead
    of a missing membership.

    Raises:
        CustomerNotFoundError: If the customer does not exist
        MembershipNotFoundError: If the customer exists but the membership does not
    """
    customer, membership = await asyncio.gather(
        customers.get(customer_id),
        memberships.get(customer_id, membership_id),
        return_exceptions=True,
    )

    if isinstance(customer, CustomerNotFoundError):
        raise customer
    for result in (customer, membership):
        if isinstance(result, BaseException):
            raise result
    return customer, membership
