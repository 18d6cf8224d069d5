"""Identity provider clients."""

from clientele.identity.auth0 import Auth0IdentityProviderClient
from clientele.identity.client import IdentityProviderClient
from clientele.identity.errors import INVALID_PASSWORD, USER_EXISTS, IdentityProviderError
from clientele.identity.inmemory import InMemoryIdentityProvider
from clientele.identity.models import CreateUserRequest, IdentityUser

__all__ = [
    "IdentityProviderClient",
    "Auth0IdentityProviderClient",
    "InMemoryIdentityProvider",
    "CreateUserRequest",
    "IdentityUser",
    "IdentityProviderError",
    "USER_EXISTS",
    "INVALID_PASSWORD",
]
