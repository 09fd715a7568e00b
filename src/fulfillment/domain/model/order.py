"""Order aggregate: the record of a committed purchase.

An Order only exists once a quote has passed every business check and
the stock has been reserved.  It is immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.value_objects import Coordinates, Money


@dataclass(frozen=True)
class Order:
    """Aggregate root for submitted orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    invariants.  The ``__init__`` is intentionally simple so the store
    can reconstitute persisted orders without re-validating.
    """

    order_number: str
    product_id: str
    quantity: int
    shipping_address: Coordinates
    total_price: Money  # after volume discount
    discount_percentage: int
    shipping_cost: Money
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        product_id: str,
        quantity: int,
        shipping_address: Coordinates,
        total_price: Money,
        discount_percentage: int,
        shipping_cost: Money,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not order_number or not order_number.strip():
            raise ValidationError("Order number is required")

        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValidationError("Quantity must be a positive integer")

        if not 0 <= discount_percentage <= 100:
            raise ValidationError("Discount percentage must be between 0 and 100")

        return Order(
            order_number=order_number,
            product_id=product_id,
            quantity=quantity,
            shipping_address=shipping_address,
            total_price=total_price,
            discount_percentage=discount_percentage,
            shipping_cost=shipping_cost,
        )
