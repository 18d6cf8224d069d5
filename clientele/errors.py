"""Domain error taxonomy.

Every error raised by the stores carries an ErrorKind from a closed
enumeration together with a human-readable message. Handlers above the
core map kinds to transport responses.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error kinds."""

    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    """No entity exists at the requested key."""

    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    """The specified customer does not exist."""

    MEMBERSHIP_NOT_FOUND = "MEMBERSHIP_NOT_FOUND"
    """The specified membership does not exist for the customer."""

    CUSTOMER_EXISTS = "CUSTOMER_EXISTS"
    """The identity provider already holds a user with this email."""

    INVALID_PASSWORD = "INVALID_PASSWORD"
    """The identity provider rejected the password as too weak."""

    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    """The email/password pair was rejected."""

    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"
    """The identity provider failed with an unmapped error."""

    DOCUMENT_STORE_ERROR = "DOCUMENT_STORE_ERROR"
    """The document store failed."""

    INVALID_QUERY = "INVALID_QUERY"
    """A query cannot be expressed by the document store."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ClienteleError(Exception):
    """Base exception for all domain errors.

    Subclasses set kind to identify the failure.
    """

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class EntityNotFoundError(ClienteleError):
    """Raised when no entity exists at a key."""

    kind = ErrorKind.ENTITY_NOT_FOUND

    def __init__(self, message: str = "", key: object | None = None) -> None:
        super().__init__(message or f"Entity {key} not found.")
        self.key = key


class CustomerNotFoundError(EntityNotFoundError):
    """Raised when a customer does not exist."""

    kind = ErrorKind.CUSTOMER_NOT_FOUND

    def __init__(self, customer_id: str, key: object | None = None) -> None:
        super().__init__(f'Customer "{customer_id}" not found.', key=key)
        self.customer_id = customer_id


class MembershipNotFoundError(EntityNotFoundError):
    """Raised when a membership does not exist for a customer."""

    kind = ErrorKind.MEMBERSHIP_NOT_FOUND

    def __init__(
        self, customer_id: str, membership_id: str, key: object | None = None
    ) -> None:
        super().__init__(
            f'Membership "{membership_id}" not found for Customer "{customer_id}".',
            key=key,
        )
        self.customer_id = customer_id
        self.membership_id = membership_id


class CustomerExistsError(ClienteleError):
    """Raised when creating a customer whose email is already registered."""

    kind = ErrorKind.CUSTOMER_EXISTS

    def __init__(self, message: str = "Email address already in use.") -> None:
        super().__init__(message)


class InvalidPasswordError(ClienteleError):
    """Raised when the identity provider rejects a password."""

    kind = ErrorKind.INVALID_PASSWORD

    def __init__(self, message: str = "Password is too weak.") -> None:
        super().__init__(message)


class AuthenticationFailedError(ClienteleError):
    """Raised when credentials are rejected."""

    kind = ErrorKind.AUTHENTICATION_FAILED

    def __init__(self, message: str = "Invalid email address or password.") -> None:
        super().__init__(message)


class InvalidQueryError(ClienteleError):
    """Raised when a query violates document store constraints."""

    kind = ErrorKind.INVALID_QUERY
