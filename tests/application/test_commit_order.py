"""Integration tests for the CommitOrder use case.

Uses the in-memory fake store, no file I/O.
"""

import logging
import threading
from datetime import datetime

import pytest

from fulfillment.application.commit_order import CommitOrderHandler
from fulfillment.application.dto import CommittedOrder
from fulfillment.application.outcomes import (
    InsufficientStock,
    InvalidInput,
    ShippingCostExceeded,
)
from fulfillment.domain.exceptions import DuplicateOrder, StockConflict, Unavailable
from fulfillment.domain.model.value_objects import Coordinates, Money, Weight
from fulfillment.domain.model.warehouse import Warehouse
from fulfillment.domain.service.order_validator import OrderValidator
from fulfillment.domain.service.warehouse_allocator import WarehouseAllocator
from tests.fakes import FakeFulfillmentStore, FixedRateShippingCalculator, make_product


def _setup(
    cents_per_unit: dict[str, int] | None = None,
) -> tuple[CommitOrderHandler, FakeFulfillmentStore]:
    """Two warehouses: 50 units at $1/unit shipping and 100 units at $2/unit."""
    warehouses = [
        Warehouse("wh-cheap", "Cheap", Coordinates(10, 10), 50),
        Warehouse("wh-expensive", "Expensive", Coordinates(20, 20), 100),
    ]
    if cents_per_unit is None:
        cents_per_unit = {"wh-cheap": 100, "wh-expensive": 200}
    store = FakeFulfillmentStore(warehouses)
    allocator = WarehouseAllocator(FixedRateShippingCalculator(cents_per_unit, Weight(365)))
    handler = CommitOrderHandler(make_product(), store, allocator, OrderValidator())
    return handler, store


class TestCommitHappyPath:

    def test_returns_committed_order(self):
        handler, _ = _setup()
        result = handler.handle(60, 0.0, 0.0)

        assert isinstance(result, CommittedOrder)
        assert result.total_price == "$8100.00"
        assert result.discount_percentage == 10
        assert result.shipping_cost == "$70.00"
        assert result.order_number
        datetime.fromisoformat(result.submitted_at)

    def test_persists_order(self):
        handler, store = _setup()
        result = handler.handle(60, 12.5, -45.0)

        saved = store.get_order(result.order_number)
        assert saved is not None
        assert saved.quantity == 60
        assert saved.product_id == "SCOS_P1_PRO"
        assert saved.shipping_address == Coordinates(12.5, -45.0)
        assert saved.total_price == Money.of("8100.00")
        assert saved.shipping_cost == Money.of("70.00")

    def test_reserves_stock_per_leg(self):
        handler, store = _setup()
        handler.handle(60, 0.0, 0.0)

        assert store.stock_of("wh-cheap") == 0
        assert store.stock_of("wh-expensive") == 90

    def test_order_numbers_are_unique(self):
        handler, _ = _setup()
        first = handler.handle(10, 0.0, 0.0)
        second = handler.handle(10, 0.0, 0.0)
        assert first.order_number != second.order_number

    def test_later_commit_sees_earlier_reservation(self):
        handler, store = _setup()
        handler.handle(100, 0.0, 0.0)

        result = handler.handle(60, 0.0, 0.0)

        assert result == InsufficientStock(requested=60, available=50)
        assert store.stock_of("wh-expensive") == 50


class TestCommitRejections:

    def test_insufficient_stock(self):
        handler, store = _setup()
        result = handler.handle(180, 0.0, 0.0)

        assert result == InsufficientStock(requested=180, available=150)
        assert "Required: 180, Available: 150" in result.message
        assert store.list_orders() == []
        assert store.stock_of("wh-cheap") == 50

    def test_stock_checked_before_shipping_cost(self):
        handler, _ = _setup(cents_per_unit={"wh-cheap": 9000, "wh-expensive": 9000})
        result = handler.handle(500, 0.0, 0.0)
        assert isinstance(result, InsufficientStock)

    def test_shipping_cost_exceeded(self):
        handler, store = _setup(cents_per_unit={"wh-cheap": 5000, "wh-expensive": 6000})
        result = handler.handle(10, 0.0, 0.0)

        assert result == ShippingCostExceeded(
            shipping_cost="$500.00", total_price="$1500.00", max_allowed="$225.00"
        )
        assert store.list_orders() == []
        assert store.stock_of("wh-cheap") == 50

    @pytest.mark.parametrize(
        "quantity, lat, lon",
        [(0, 0.0, 0.0), (-4, 0.0, 0.0), (1.5, 0.0, 0.0), (10, -91.0, 0.0), (10, 0.0, 181.0)],
    )
    def test_invalid_input_never_touches_store(self, quantity, lat, lon):
        handler, store = _setup()
        result = handler.handle(quantity, lat, lon)

        assert isinstance(result, InvalidInput)
        assert store.snapshot_reads == 0

    def test_business_rejections_not_logged_as_errors(self, caplog):
        handler, _ = _setup()
        with caplog.at_level(logging.DEBUG):
            handler.handle(1000, 0.0, 0.0)
        assert caplog.records
        assert all(r.levelno < logging.WARNING for r in caplog.records)


class TestCommitStoreFaults:

    @pytest.mark.parametrize(
        "fault", [Unavailable("db down"), StockConflict("stock moved")]
    )
    def test_store_fault_propagates_unchanged(self, fault):
        handler, store = _setup()
        store.fail_next_apply = fault

        with pytest.raises(type(fault)) as excinfo:
            handler.handle(60, 0.0, 0.0)

        assert excinfo.value is fault
        assert store.list_orders() == []
        assert store.stock_of("wh-cheap") == 50
        assert store.stock_of("wh-expensive") == 100

    def test_duplicate_order_number_propagates(self, monkeypatch):
        handler, store = _setup()
        monkeypatch.setattr(
            "fulfillment.application.commit_order.new_order_number", lambda: "fixed-number"
        )
        handler.handle(10, 0.0, 0.0)

        with pytest.raises(DuplicateOrder):
            handler.handle(10, 0.0, 0.0)

        assert len(store.list_orders()) == 1
        assert store.stock_of("wh-cheap") == 40


class TestConcurrentCommits:

    def test_only_one_of_two_oversized_commits_succeeds(self):
        handler, store = _setup()
        barrier = threading.Barrier(2)
        results = []

        def submit():
            barrier.wait()
            results.append(handler.handle(100, 0.0, 0.0))

        threads = [threading.Thread(target=submit) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        committed = [r for r in results if isinstance(r, CommittedOrder)]
        rejected = [r for r in results if isinstance(r, InsufficientStock)]
        assert len(committed) == 1
        assert rejected == [InsufficientStock(requested=100, available=50)]
        assert store.stock_of("wh-cheap") == 0
        assert store.stock_of("wh-expensive") == 50
