"""Abstract store for warehouses and orders.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in the
infrastructure layer and the tests.

The store is the transaction boundary: ``unit_of_work()`` serialises
conflicting commits, and ``apply_order_atomically()`` either persists
the order *and* every stock delta, or nothing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from fulfillment.domain.model.order import Order
from fulfillment.domain.model.warehouse import StockDelta, Warehouse


class FulfillmentStore(ABC):

    @abstractmethod
    def load_warehouse_snapshot(self) -> list[Warehouse]:
        """Return every warehouse with its current stock.

        Raises Unavailable if the store cannot be read.
        """

    @abstractmethod
    def apply_order_atomically(self, order: Order, stock_deltas: list[StockDelta]) -> None:
        """Persist *order* and apply *stock_deltas* as one unit.

        Raises DuplicateOrder, StockConflict or Unavailable; on any
        failure nothing is changed.
        """

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Context in which a read-then-write commit runs without interleaving."""

    @abstractmethod
    def get_order(self, order_number: str) -> Order | None:
        """Return an order by its number, or None if not found."""

    @abstractmethod
    def list_orders(self) -> list[Order]:
        """Return every persisted order."""

    @abstractmethod
    def save_warehouses(self, warehouses: list[Warehouse]) -> None:
        """Replace the stored warehouse set (used for seeding)."""
