"""IdentityProviderClient abstract interface."""

from abc import ABC, abstractmethod

from clientele.identity.models import CreateUserRequest, IdentityUser


class IdentityProviderClient(ABC):
    """Abstract interface for the external identity service.

    Implementations raise IdentityProviderError for rejected requests.
    """

    @abstractmethod
    async def create_user(self, request: CreateUserRequest) -> IdentityUser:
        """Create a user."""
        pass

    @abstractmethod
    async def delete_user(self, provider_id: str) -> None:
        """Delete a user."""
        pass

    @abstractmethod
    async def update_user_email(
        self, provider_id: str, new_email: str, verify: bool
    ) -> None:
        """Change a user's email, optionally requiring re-verification."""
        pass

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> str:
        """Exchange credentials for an id token.

        Raises:
            AuthenticationFailedError: If the credentials are rejected
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
