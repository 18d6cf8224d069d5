"""Identity provider errors."""

from clientele.errors import ClienteleError, ErrorKind

USER_EXISTS = "user_exists"
INVALID_PASSWORD = "invalid_password"


class IdentityProviderError(ClienteleError):
    """Raised when the identity provider rejects or fails a request.

    The code is machine readable; USER_EXISTS and INVALID_PASSWORD are
    the codes callers are expected to recognise.
    """

    kind = ErrorKind.IDENTITY_PROVIDER_ERROR

    def __init__(
        self,
        code: str,
        message: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message or code)
        self.code = code
        self.status_code = status_code
