"""Domain service: Order Validator.

An order is only worth shipping if the shipping cost stays within a
fixed share of the discounted order price.
"""

from __future__ import annotations

from decimal import Decimal

from fulfillment.domain.model.value_objects import Money

MAX_SHIPPING_COST_PERCENTAGE = 15


class OrderValidator:

    def __init__(self, max_shipping_cost_percentage: int = MAX_SHIPPING_COST_PERCENTAGE) -> None:
        self._max_percentage = max_shipping_cost_percentage

    @property
    def max_shipping_cost_percentage(self) -> int:
        return self._max_percentage

    def max_allowed_shipping_cost(self, discounted_price: Money) -> Money:
        return discounted_price * (Decimal(self._max_percentage) / Decimal(100))

    def is_order_valid(self, discounted_price: Money, shipping_cost: Money) -> bool:
        """True iff shipping_cost <= max% of the discounted price.

        A zero-priced order is never valid.
        """
        if discounted_price.amount_in_cents <= 0:
            return False
        return shipping_cost <= self.max_allowed_shipping_cost(discounted_price)
