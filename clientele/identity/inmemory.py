"""In-memory implementation of IdentityProviderClient."""

import secrets
from dataclasses import dataclass, field
from uuid import uuid4

from clientele.errors import AuthenticationFailedError
from clientele.identity.client import IdentityProviderClient
from clientele.identity.errors import INVALID_PASSWORD, USER_EXISTS, IdentityProviderError
from clientele.identity.models import CreateUserRequest, IdentityUser


@dataclass
class StoredUser:
    """User record held by the in-memory provider."""

    provider_id: str
    connection: str
    email: str
    password: str = field(repr=False)
    external_id: str
    scope: list[str]
    email_verified: bool = False


class InMemoryIdentityProvider(IdentityProviderClient):
    """In-memory identity provider for testing and development.

    Emails are unique per connection (case-insensitive) and passwords
    shorter than min_password_length are rejected.
    """

    def __init__(self, min_password_length: int = 8) -> None:
        """Initialize empty user storage."""
        self._min_password_length = min_password_length
        self._users: dict[str, StoredUser] = {}

    @property
    def users(self) -> dict[str, StoredUser]:
        """Stored users keyed by provider id."""
        return self._users

    def _find_by_email(self, connection: str, email: str) -> StoredUser | None:
        for user in self._users.values():
            if user.connection == connection and user.email.lower() == email.lower():
                return user
        return None

    async def create_user(self, request: CreateUserRequest) -> IdentityUser:
        """Create a user."""
        if self._find_by_email(request.connection, request.email):
            raise IdentityProviderError(USER_EXISTS, "The user already exists.", 409)
        if len(request.password) < self._min_password_length:
            raise IdentityProviderError(INVALID_PASSWORD, "Password is too weak", 400)

        user = StoredUser(
            provider_id=f"inmemory|{uuid4().hex}",
            connection=request.connection,
            email=request.email,
            password=request.password,
            external_id=request.external_id,
            scope=list(request.scope),
        )
        self._users[user.provider_id] = user
        return IdentityUser(provider_id=user.provider_id, email=user.email)

    async def delete_user(self, provider_id: str) -> None:
        """Delete a user."""
        if self._users.pop(provider_id, None) is None:
            raise IdentityProviderError("inexistent_user", "The user does not exist.", 404)

    async def update_user_email(
        self, provider_id: str, new_email: str, verify: bool
    ) -> None:
        """Change a user's email address."""
        user = self._users.get(provider_id)
        if user is None:
            raise IdentityProviderError("inexistent_user", "The user does not exist.", 404)
        other = self._find_by_email(user.connection, new_email)
        if other is not None and other is not user:
            raise IdentityProviderError(USER_EXISTS, "The specified new email already exists", 400)
        user.email = new_email
        user.email_verified = not verify

    async def authenticate(self, email: str, password: str) -> str:
        """Exchange credentials for an opaque token."""
        for user in self._users.values():
            if user.email.lower() == email.lower() and user.password == password:
                return secrets.token_urlsafe(32)
        raise AuthenticationFailedError()
