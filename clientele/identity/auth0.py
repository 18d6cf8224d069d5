"""Auth0 implementation of IdentityProviderClient.

Users are managed through the Management API (``/api/v2/users``);
credentials are checked with the password-realm grant of the
Authentication API (``/oauth/token``).
"""

from typing import Any
from urllib.parse import quote

import httpx

from clientele.errors import AuthenticationFailedError
from clientele.identity.client import IdentityProviderClient
from clientele.identity.errors import INVALID_PASSWORD, USER_EXISTS, IdentityProviderError
from clientele.identity.models import CreateUserRequest, IdentityUser
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

PASSWORD_REALM_GRANT = "http://auth0.net/oauth/grant-type/password-realm"


class Auth0IdentityProviderClient(IdentityProviderClient):
    """Identity provider client backed by Auth0.

    Usage:
        client = Auth0IdentityProviderClient(
            domain="example.eu.auth0.com",
            management_token="eyJ...",
            client_id="abc",
        )
        user = await client.create_user(request)
        await client.close()
    """

    def __init__(
        self,
        domain: str,
        management_token: str,
        client_id: str | None = None,
        client_secret: str | None = None,
        connection: str = "Username-Password-Authentication",
        audience: str | None = None,
        scope: str = "openid",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            domain: Auth0 tenant domain
            management_token: Management API bearer token
            client_id: Application client id used for authentication
            client_secret: Application client secret
            connection: Database connection (realm) of the users
            audience: API audience requested on authentication
            scope: Scope requested on authentication
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self._management_token = management_token
        self._client_id = client_id
        self._client_secret = client_secret
        self._connection = connection
        self._audience = audience
        self._scope = scope
        self._client = httpx.AsyncClient(
            base_url=f"https://{domain}",
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    def _management_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._management_token}",
        }

    @staticmethod
    def _user_path(provider_id: str) -> str:
        return f"/api/v2/users/{quote(provider_id, safe='')}"

    async def create_user(self, request: CreateUserRequest) -> IdentityUser:
        """Create a database user carrying the customer cross reference."""
        payload = {
            "connection": request.connection,
            "email": request.email,
            "password": request.password,
            "app_metadata": {
                "customer_id": request.external_id,
                "scope": request.scope,
            },
        }
        response = await self._client.post(
            "/api/v2/users", json=payload, headers=self._management_headers()
        )
        self._raise_for_error(response, "create_user")

        body = response.json()
        logger.info("identity_user_created", provider_id=body["user_id"])
        return IdentityUser(provider_id=body["user_id"], email=body["email"])

    async def delete_user(self, provider_id: str) -> None:
        """Delete a user."""
        response = await self._client.delete(
            self._user_path(provider_id), headers=self._management_headers()
        )
        self._raise_for_error(response, "delete_user")
        logger.info("identity_user_deleted", provider_id=provider_id)

    async def update_user_email(
        self, provider_id: str, new_email: str, verify: bool
    ) -> None:
        """Change a user's email address."""
        response = await self._client.patch(
            self._user_path(provider_id),
            json={
                "email": new_email,
                "verify_email": verify,
                "connection": self._connection,
            },
            headers=self._management_headers(),
        )
        self._raise_for_error(response, "update_user_email")
        logger.info("identity_user_email_updated", provider_id=provider_id)

    async def authenticate(self, email: str, password: str) -> str:
        """Exchange credentials for an id token."""
        payload: dict[str, Any] = {
            "grant_type": PASSWORD_REALM_GRANT,
            "realm": self._connection,
            "username": email,
            "password": password,
            "client_id": self._client_id,
            "scope": self._scope,
        }
        if self._client_secret:
            payload["client_secret"] = self._client_secret
        if self._audience:
            payload["audience"] = self._audience

        response = await self._client.post("/oauth/token", json=payload)
        if response.status_code in (401, 403):
            body = _json_body(response)
            if body.get("error") in ("invalid_grant", "invalid_user_password"):
                raise AuthenticationFailedError()
        self._raise_for_error(response, "authenticate")

        return response.json()["id_token"]

    @staticmethod
    def _raise_for_error(response: httpx.Response, operation: str) -> None:
        """Translate an error response into IdentityProviderError."""
        if response.is_success:
            return

        body = _json_body(response)
        message = str(body.get("message") or body.get("error_description") or "")
        code = _error_code(response.status_code, body, message)

        logger.warning(
            "identity_provider_error",
            operation=operation,
            status_code=response.status_code,
            code=code,
        )
        raise IdentityProviderError(code, message, status_code=response.status_code)


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_code(status_code: int, body: dict[str, Any], message: str) -> str:
    error_code = body.get("errorCode") or body.get("code")
    if error_code in (USER_EXISTS, INVALID_PASSWORD):
        return error_code
    if status_code == 409:
        return USER_EXISTS
    if status_code == 400 and "PasswordStrengthError" in message:
        return INVALID_PASSWORD
    return str(error_code or body.get("error") or f"http_{status_code}")
