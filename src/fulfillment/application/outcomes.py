"""Business outcomes returned by the quote and commit use cases.

Rejections that the business expects (bad input, not enough stock,
shipping too expensive) are values, not exceptions.  Callers match on
the type:

    outcome = handler.handle(quantity, lat, lon)
    if isinstance(outcome, InsufficientStock):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass

from fulfillment.application.dto import CommittedOrder, QuoteResult


@dataclass(frozen=True)
class InvalidInput:
    reason: str

    @property
    def message(self) -> str:
        return f"Invalid input: {self.reason}"


@dataclass(frozen=True)
class InsufficientStock:
    requested: int
    available: int

    @property
    def message(self) -> str:
        return (
            f"Order cannot be fulfilled. Required: {self.requested}, "
            f"Available: {self.available}."
        )


@dataclass(frozen=True)
class ShippingCostExceeded:
    shipping_cost: str
    total_price: str
    max_allowed: str

    @property
    def message(self) -> str:
        return (
            f"Order invalid: Shipping cost ({self.shipping_cost}) exceeds "
            f"the allowed maximum ({self.max_allowed}) for a discounted "
            f"price of {self.total_price}."
        )


QuoteOutcome = QuoteResult | InvalidInput
CommitOutcome = CommittedOrder | InvalidInput | InsufficientStock | ShippingCostExceeded
