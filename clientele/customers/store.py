"""Customer persistence across the identity provider and the document store.

A customer exists twice: as a user at the identity provider, holding the
credentials, and as a document holding everything else. Creation always
writes the identity-provider user first, so a document never points at
a missing identity. When the document write fails the user is deleted
again on a best-effort basis.
"""

from collections.abc import Callable, Mapping
from typing import Any

from clientele.datastore.keys import Key
from clientele.entities import (
    HIDDEN_FIELD,
    METADATA_CREATED,
    Entity,
    EntityStore,
    preserved_fields,
    writable_attributes,
)
from clientele.errors import (
    ClienteleError,
    CustomerExistsError,
    CustomerNotFoundError,
    InvalidPasswordError,
)
from clientele.identity import (
    INVALID_PASSWORD,
    USER_EXISTS,
    CreateUserRequest,
    IdentityProviderClient,
    IdentityProviderError,
    IdentityUser,
)
from clientele.ids import new_id
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

CUSTOMER_KIND = "Customer"
IDENTITY_PROVIDER_ID = "identityProviderId"
DEFAULT_CONNECTION = "Username-Password-Authentication"

_PROVIDER_ERRORS: dict[str, type[ClienteleError]] = {
    USER_EXISTS: CustomerExistsError,
    INVALID_PASSWORD: InvalidPasswordError,
}


def customer_key(customer_id: str) -> Key:
    """Key of a customer document."""
    return Key.of(CUSTOMER_KIND, customer_id)


def customer_scope(customer_id: str) -> str:
    """Authorization scope granting access to one customer's resources."""
    return f"customer:{customer_id}"


def _not_found(customer_id: str) -> Callable[[Key], CustomerNotFoundError]:
    return lambda key: CustomerNotFoundError(customer_id, key=key)


class CustomerCreation:
    """Customer creation workflow with a compensating action.

    1. create the identity-provider user
    2. insert the customer document

    When step 2 fails the user from step 1 is deleted and the step 2
    error is re-raised. A failed deletion is logged and never replaces
    the step 2 error.
    """

    def __init__(
        self,
        entities: EntityStore,
        identity: IdentityProviderClient,
        connection: str,
        customer_id: str,
        params: Mapping[str, Any],
    ) -> None:
        self._entities = entities
        self._identity = identity
        self._connection = connection
        self.customer_id = customer_id
        self._params = params

    async def run(self) -> Entity:
        """Execute the workflow and return the public customer model."""
        user = await self._create_identity()
        try:
            customer = await self._persist(user)
        except Exception:
            await self._compensate(user)
            raise

        logger.info("customer_created", customer_id=self.customer_id)
        return customer

    async def _create_identity(self) -> IdentityUser:
        request = CreateUserRequest(
            connection=self._connection,
            email=self._params["email"],
            password=self._params["password"],
            external_id=self.customer_id,
            scope=[customer_scope(self.customer_id)],
        )
        try:
            return await self._identity.create_user(request)
        except IdentityProviderError as e:
            error_class = _PROVIDER_ERRORS.get(e.code)
            if error_class is None:
                raise
            logger.info(
                "customer_identity_rejected",
                customer_id=self.customer_id,
                code=e.code,
            )
            raise error_class() from e

    async def _persist(self, user: IdentityUser) -> Entity:
        attributes = {HIDDEN_FIELD: {IDENTITY_PROVIDER_ID: user.provider_id}}
        attributes.update(writable_attributes(self._params, "password"))
        return await self._entities.create(customer_key(self.customer_id), attributes)

    async def _compensate(self, user: IdentityUser) -> None:
        logger.warning(
            "customer_persist_failed",
            customer_id=self.customer_id,
            provider_id=user.provider_id,
        )
        try:
            await self._identity.delete_user(user.provider_id)
        except Exception as e:
            logger.error(
                "customer_compensation_failed",
                customer_id=self.customer_id,
                provider_id=user.provider_id,
                error=str(e),
            )
        else:
            logger.info(
                "customer_compensated",
                customer_id=self.customer_id,
                provider_id=user.provider_id,
            )


class CustomerStore:
    """Customer create/get/update over the identity provider and entity store."""

    def __init__(
        self,
        entities: EntityStore,
        identity: IdentityProviderClient,
        connection: str = DEFAULT_CONNECTION,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        """Initialize the store.

        Args:
            entities: Entity store holding customer documents
            identity: Identity provider client
            connection: Identity-provider connection users are created in
            id_factory: Customer id generator
        """
        self._entities = entities
        self._identity = identity
        self._connection = connection
        self._id_factory = id_factory

    async def create(self, params: Mapping[str, Any]) -> Entity:
        """Create a customer.

        Args:
            params: Customer attributes including email and password

        Raises:
            CustomerExistsError: If the email is already registered
            InvalidPasswordError: If the password is rejected
        """
        creation = CustomerCreation(
            self._entities,
            self._identity,
            self._connection,
            self._id_factory(),
            params,
        )
        return await creation.run()

    async def get(self, customer_id: str) -> Entity:
        """Get a customer.

        Raises:
            CustomerNotFoundError: If the customer does not exist
        """
        return await self._entities.get(
            customer_key(customer_id), not_found=_not_found(customer_id)
        )

    async def update(self, customer_id: str, params: Mapping[str, Any]) -> Entity:
        """Replace a customer's attributes.

        All public attributes are overwritten by params. An email change
        is applied at the identity provider before the document is saved.

        Raises:
            CustomerNotFoundError: If the customer does not exist
            ValueError: If params carries no email
        """
        if not params.get("email"):
            raise ValueError("Customer updates require an email address")

        key = customer_key(customer_id)
        existing = await self._entities.get_raw(key, not_found=_not_found(customer_id))

        if params["email"] != existing.data.get("email"):
            provider_id = existing.data[HIDDEN_FIELD][IDENTITY_PROVIDER_ID]
            await self._identity.update_user_email(provider_id, params["email"], True)
            logger.info("customer_email_changed", customer_id=customer_id)

        attributes = preserved_fields(existing, HIDDEN_FIELD, METADATA_CREATED)
        attributes.update(writable_attributes(params, "password"))

        customer = await self._entities.update(key, attributes)
        logger.info("customer_updated", customer_id=customer_id)
        return customer

    async def authenticate(self, email: str, password: str) -> str:
        """Exchange customer credentials for an identity-provider token.

        Raises:
            AuthenticationFailedError: If the credentials are rejected
        """
        return await self._identity.authenticate(email, password)
