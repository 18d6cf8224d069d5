"""Document store error hierarchy.

All document store backends raise these errors so that callers see the
same failures whichever backend is configured.
"""

from clientele.errors import ClienteleError, ErrorKind


class DocumentStoreError(ClienteleError):
    """Base exception for all document store failures."""

    kind = ErrorKind.DOCUMENT_STORE_ERROR

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(DocumentStoreError):
    """Raised when the backend cannot be reached.

    Examples:
        - Database connection timeout
        - Network errors
    """

    pass


class DocumentConflictError(DocumentStoreError):
    """Raised when inserting at a key that is already occupied."""

    pass


class DocumentNotFoundError(DocumentStoreError):
    """Raised when updating a key that holds no document."""

    pass
