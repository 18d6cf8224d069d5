"""Identity provider configuration."""

from typing import Literal

from pydantic import BaseModel, Field, SecretStr

IdentityBackendType = Literal["inmemory", "auth0"]


class IdentityConfig(BaseModel):
    """Configuration for the identity provider client."""

    backend: IdentityBackendType = Field(
        default="inmemory",
        description="Identity provider backend",
    )
    domain: str | None = Field(
        default=None,
        description="Identity provider tenant domain, e.g. example.eu.auth0.com",
    )
    connection: str = Field(
        default="Username-Password-Authentication",
        description="Database connection users are created in",
    )
    client_id: str | None = Field(default=None, description="Application client id")
    client_secret: SecretStr | None = Field(
        default=None,
        description="Application client secret",
    )
    management_token: SecretStr | None = Field(
        default=None,
        description="Management API token",
    )
    audience: str | None = Field(
        default=None,
        description="API audience requested on authentication",
    )
    scope: str = Field(
        default="openid",
        description="Scope requested on authentication",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP request timeout (seconds)",
    )
    min_password_length: int = Field(
        default=8,
        gt=0,
        description="Minimum password length for the in-memory backend",
    )
