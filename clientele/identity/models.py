"""Identity provider request and response models."""

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequest(BaseModel):
    """User to be created at the identity provider."""

    model_config = ConfigDict(frozen=True)

    connection: str = Field(..., description="Connection (user database) to create in")
    email: str = Field(..., description="Login email address")
    password: str = Field(..., repr=False, description="Initial password")
    external_id: str = Field(..., description="Customer id cross reference")
    scope: list[str] = Field(default_factory=list, description="Authorization scopes")


class IdentityUser(BaseModel):
    """User as known by the identity provider."""

    provider_id: str = Field(..., description="Identity provider user id")
    email: str = Field(..., description="Login email address")
