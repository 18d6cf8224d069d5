"""Customer-specific product price adjustments."""

from clientele.adjustments.models import (
    AdjustmentType,
    ProductPriceAdjustmentParameters,
)
from clientele.adjustments.store import (
    ADJUSTMENT_KIND,
    ProductPriceAdjustmentStore,
    adjustment_key,
)

__all__ = [
    "ADJUSTMENT_KIND",
    "AdjustmentType",
    "ProductPriceAdjustmentParameters",
    "ProductPriceAdjustmentStore",
    "adjustment_key",
]
