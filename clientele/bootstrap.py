"""Wiring of stores and clients from settings.

Usage:
    stack = await create_stack()
    try:
        customer = await stack.customers.create(params)
    finally:
        await stack.close()
"""

from dataclasses import dataclass

from clientele.adjustments.store import ProductPriceAdjustmentStore
from clientele.config import get_settings
from clientele.config.models.identity import IdentityConfig
from clientele.config.settings import Settings
from clientele.customers.store import CustomerStore
from clientele.datastore.pool import PostgresPool
from clientele.datastore.store import DocumentStore
from clientele.datastore.stores.inmemory import InMemoryDocumentStore
from clientele.datastore.stores.postgres import PostgresDocumentStore
from clientele.entities import EntityStore
from clientele.identity.auth0 import Auth0IdentityProviderClient
from clientele.identity.client import IdentityProviderClient
from clientele.identity.inmemory import InMemoryIdentityProvider
from clientele.memberships.store import MembershipStore
from clientele.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class Stack:
    """Stores and the resources backing them."""

    documents: DocumentStore
    identity: IdentityProviderClient
    entities: EntityStore
    customers: CustomerStore
    memberships: MembershipStore
    adjustments: ProductPriceAdjustmentStore
    pool: PostgresPool | None = None

    async def close(self) -> None:
        """Release the HTTP client and the connection pool."""
        await self.identity.close()
        if self.pool is not None:
            await self.pool.close()
        logger.info("stack_closed")


def create_identity_client(config: IdentityConfig) -> IdentityProviderClient:
    """Build the identity provider client for a configuration."""
    if config.backend == "inmemory":
        return InMemoryIdentityProvider(min_password_length=config.min_password_length)

    if not config.domain or config.management_token is None:
        raise ValueError("The auth0 identity backend requires domain and management_token")
    return Auth0IdentityProviderClient(
        domain=config.domain,
        management_token=config.management_token.get_secret_value(),
        client_id=config.client_id,
        client_secret=(
            config.client_secret.get_secret_value() if config.client_secret else None
        ),
        connection=config.connection,
        audience=config.audience,
        scope=config.scope,
        timeout=config.timeout,
    )


async def create_stack(settings: Settings | None = None) -> Stack:
    """Build every store from settings.

    Args:
        settings: Settings to use, defaults to get_settings()
    """
    settings = settings or get_settings()
    logging_config = settings.observability.logging
    setup_logging(
        level=logging_config.level,
        format=logging_config.format,
        redact_pii=logging_config.redact_pii,
    )

    storage = settings.storage
    pool: PostgresPool | None = None
    if storage.backend == "postgres":
        pool = PostgresPool.from_config(storage)

    identity = create_identity_client(settings.identity)

    documents: DocumentStore
    if pool is not None:
        documents = PostgresDocumentStore(pool, table_name=storage.table_name)
        try:
            await pool.connect()
            if storage.ensure_schema:
                await documents.ensure_schema()
        except Exception:
            await pool.close()
            await identity.close()
            raise
    else:
        documents = InMemoryDocumentStore()

    entities = EntityStore(documents)

    logger.info(
        "stack_created",
        storage_backend=storage.backend,
        identity_backend=settings.identity.backend,
    )
    return Stack(
        documents=documents,
        identity=identity,
        entities=entities,
        customers=CustomerStore(
            entities, identity, connection=settings.identity.connection
        ),
        memberships=MembershipStore(entities),
        adjustments=ProductPriceAdjustmentStore(entities),
        pool=pool,
    )
