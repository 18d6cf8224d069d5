"""Membership parameter models."""

from pydantic import BaseModel, Field


class MembershipParameters(BaseModel):
    """Parameters of a customer's membership at a supplier."""

    supplier_id: str = Field(..., min_length=1, description="Supplier identifier")
    membership_number: str = Field(
        ..., min_length=1, description="Membership number issued by the supplier"
    )
    price_adjustment_group_id: str | None = Field(
        default=None, description="Supplier price adjustment group"
    )
