"""Product price adjustment parameter models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class AdjustmentType(str, Enum):
    """How an adjustment changes a product's price."""

    VALUE_OVERRIDE = "value_override"
    """Replace the price with amount."""

    VALUE_ADJUSTMENT = "value_adjustment"
    """Add amount (possibly negative) to the price."""

    PERCENTAGE_ADJUSTMENT = "percentage_adjustment"
    """Scale the price by amount percent."""


POSITIVE_AMOUNT_TYPES = frozenset(
    {AdjustmentType.VALUE_OVERRIDE, AdjustmentType.PERCENTAGE_ADJUSTMENT}
)


class ProductPriceAdjustmentParameters(BaseModel):
    """Parameters of a customer-specific price adjustment for one product."""

    linked_product_id: str = Field(..., min_length=1, description="Adjusted product")
    type: AdjustmentType = Field(..., description="Kind of adjustment")
    amount: float = Field(..., description="Adjustment amount")
    start_date: datetime = Field(..., description="First moment the adjustment applies")
    end_date: datetime | None = Field(
        default=None, description="Last moment the adjustment applies, open if unset"
    )

    @model_validator(mode="after")
    def check_amount_sign(self) -> "ProductPriceAdjustmentParameters":
        """Overrides and percentages must be positive."""
        if self.type in POSITIVE_AMOUNT_TYPES and self.amount <= 0:
            raise ValueError(f"amount must be positive for {self.type.value}")
        return self
