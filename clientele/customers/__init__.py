"""Customer accounts spanning the identity provider and the document store."""

from clientele.customers.models import (
    Address,
    Credentials,
    CustomerAttributes,
    CustomerCreate,
    CustomerUpdate,
)
from clientele.customers.store import (
    CUSTOMER_KIND,
    CustomerCreation,
    CustomerStore,
    customer_key,
    customer_scope,
)

__all__ = [
    # Store
    "CustomerStore",
    "CustomerCreation",
    "CUSTOMER_KIND",
    "customer_key",
    "customer_scope",
    # Models
    "Address",
    "Credentials",
    "CustomerAttributes",
    "CustomerCreate",
    "CustomerUpdate",
]
