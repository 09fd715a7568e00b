"""Product aggregate and its volume-discount table.

There is exactly one product for sale.  It is built once at start-up
from configuration and handed to whoever needs it; nothing mutates it
afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.value_objects import Money, Weight

BASE_TIER_MIN_QUANTITY = 0


@dataclass(frozen=True)
class DiscountTier:
    """Orders of at least ``min_quantity`` units get ``discount_percentage`` off."""

    min_quantity: int
    discount_percentage: int

    def __post_init__(self) -> None:
        if not isinstance(self.min_quantity, int) or self.min_quantity < 0:
            raise ValidationError(
                f"Tier minimum quantity must be a non-negative integer, got {self.min_quantity!r}"
            )
        if not 0 <= self.discount_percentage <= 100:
            raise ValidationError(
                f"Tier discount must be between 0 and 100, got {self.discount_percentage!r}"
            )


@dataclass(frozen=True)
class Product:
    """The product in the catalog.

    Invariants:
    - ``discount_tiers`` is sorted by ``min_quantity`` descending
    - the last tier has ``min_quantity == 0``, so every non-negative
      quantity matches exactly one tier
    """

    id: str
    name: str
    unit_price: Money
    unit_weight: Weight
    discount_tiers: tuple[DiscountTier, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Product ID is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")

        minimums = [tier.min_quantity for tier in self.discount_tiers]
        if len(set(minimums)) != len(minimums):
            raise ValidationError("Discount tiers must have distinct minimum quantities")

        tiers = sorted(self.discount_tiers, key=lambda t: t.min_quantity, reverse=True)
        if not tiers or tiers[-1].min_quantity != BASE_TIER_MIN_QUANTITY:
            tiers.append(DiscountTier(BASE_TIER_MIN_QUANTITY, 0))
        object.__setattr__(self, "discount_tiers", tuple(tiers))

    # --- Pricing ----------------------------------------------------------------

    def discount_percentage(self, quantity: int) -> int:
        """Return the discount for *quantity*; 0 for non-positive quantities."""
        if quantity <= 0:
            return 0
        for tier in self.discount_tiers:
            if quantity >= tier.min_quantity:
                return tier.discount_percentage
        return 0

    def total_price(self, quantity: int) -> Money:
        """Discounted price for *quantity* units.

        Rounded once, on the final discounted amount.
        """
        base_price = self.unit_price * quantity
        return base_price.apply_discount_percentage(self.discount_percentage(quantity))

    def total_weight(self, quantity: int) -> Weight:
        return self.unit_weight * quantity
