"""Warehouse snapshot records and the stock changes applied to them."""

from __future__ import annotations

from dataclasses import dataclass, replace

from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.value_objects import Coordinates


@dataclass(frozen=True)
class Warehouse:
    """A warehouse as read from the store at one point in time.

    The record is immutable; stock only changes in storage, through
    ``StockDelta`` values produced by an allocation.
    """

    id: str
    name: str
    location: Coordinates
    stock: int

    def __post_init__(self) -> None:
        if not isinstance(self.stock, int) or isinstance(self.stock, bool):
            raise ValidationError(
                f"Stock must be an integer, got {type(self.stock).__name__}"
            )
        if self.stock < 0:
            raise ValidationError(
                f"Stock for warehouse '{self.name}' cannot be negative"
            )

    def with_stock_change(self, quantity_change: int) -> Warehouse:
        """Return a copy with ``quantity_change`` applied to the stock."""
        new_stock = self.stock + quantity_change
        if new_stock < 0:
            raise ValidationError(
                f"Insufficient stock in {self.name} "
                f"(change {quantity_change}, have {self.stock})"
            )
        return replace(self, stock=new_stock)


@dataclass(frozen=True)
class StockDelta:
    """Change to apply to one warehouse's stock (negative to reserve)."""

    warehouse_id: str
    quantity_change: int
