"""Customer parameter models.

Describe the payloads accepted for customers. Stores take plain
mappings; handlers validate with these models and pass
``model_dump(exclude_none=True)`` on.
"""

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Address(BaseModel):
    """Postal address of a customer."""

    model_config = ConfigDict(extra="allow")

    line_1: str | None = Field(default=None, description="First address line")
    line_2: str | None = Field(default=None, description="Second address line")
    city: str | None = Field(default=None, description="City")
    postcode: str | None = Field(default=None, description="Postal code")
    country: str | None = Field(default=None, description="Country")


class CustomerAttributes(BaseModel):
    """Public customer attributes."""

    model_config = ConfigDict(extra="allow")

    email: str = Field(..., pattern=EMAIL_PATTERN, description="Customer email address")
    vat_number: str | None = Field(default=None, description="VAT registration number")
    line_of_business: str | None = Field(default=None, description="Line of business")
    addresses: list[Address] | None = Field(default=None, description="Addresses")
    default_sign_for: str | None = Field(
        default=None, description="Default person signing for deliveries"
    )


class CustomerCreate(CustomerAttributes):
    """Parameters of a customer to be created."""

    password: str = Field(..., min_length=1, repr=False, description="Customer password")


class CustomerUpdate(CustomerAttributes):
    """Complete replacement attributes of an existing customer."""

    pass


class Credentials(BaseModel):
    """Customer login credentials."""

    email: str = Field(..., pattern=EMAIL_PATTERN, description="Customer email address")
    password: str = Field(..., min_length=1, repr=False, description="Customer password")
