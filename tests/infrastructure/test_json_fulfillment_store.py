"""Tests for the JSON-file-backed store."""

import json
import threading

import pytest

from fulfillment.application.commit_order import CommitOrderHandler
from fulfillment.application.dto import CommittedOrder
from fulfillment.application.outcomes import InsufficientStock
from fulfillment.domain.exceptions import DuplicateOrder, StockConflict, Unavailable
from fulfillment.domain.model.order import Order
from fulfillment.domain.model.value_objects import Coordinates, Money
from fulfillment.domain.model.warehouse import StockDelta, Warehouse
from fulfillment.domain.service.order_validator import OrderValidator
from fulfillment.domain.service.shipping_calculator import ShippingCalculator
from fulfillment.domain.service.warehouse_allocator import WarehouseAllocator
from fulfillment.infrastructure.persistence.json_fulfillment_store import (
    JsonFulfillmentStore,
)
from fulfillment.infrastructure.persistence.seed import DEFAULT_WAREHOUSES, seed_warehouses
from tests.fakes import make_product


def _order(number: str = "ord-1", quantity: int = 5) -> Order:
    return Order.create(
        order_number=number,
        product_id="SCOS_P1_PRO",
        quantity=quantity,
        shipping_address=Coordinates(40.0, -74.0),
        total_price=Money.of("750.00"),
        discount_percentage=0,
        shipping_cost=Money.of("12.34"),
    )


def _store(tmp_path) -> JsonFulfillmentStore:
    store = JsonFulfillmentStore(tmp_path / "data" / "fulfillment.json")
    store.save_warehouses([
        Warehouse("wh-1", "One", Coordinates(10, 10), 20),
        Warehouse("wh-2", "Two", Coordinates(20, 20), 5),
    ])
    return store


class TestSnapshot:

    def test_creates_empty_file(self, tmp_path):
        store = JsonFulfillmentStore(tmp_path / "new" / "store.json")
        assert store.load_warehouse_snapshot() == []
        assert store.list_orders() == []

    def test_round_trips_warehouses(self, tmp_path):
        store = _store(tmp_path)
        snapshot = store.load_warehouse_snapshot()
        assert [(wh.id, wh.stock) for wh in snapshot] == [("wh-1", 20), ("wh-2", 5)]
        assert snapshot[0].location == Coordinates(10, 10)

    def test_corrupt_file_is_unavailable(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFulfillmentStore(path)
        with pytest.raises(Unavailable):
            store.load_warehouse_snapshot()

    def test_invalid_record_is_unavailable(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(
            json.dumps({"warehouses": [{"id": "x", "name": "X", "latitude": 99,
                                        "longitude": 0, "stock": 1}], "orders": []}),
            encoding="utf-8",
        )
        with pytest.raises(Unavailable, match="Corrupt warehouse record"):
            JsonFulfillmentStore(path).load_warehouse_snapshot()


class TestApplyOrderAtomically:

    def test_persists_order_and_stock(self, tmp_path):
        store = _store(tmp_path)
        order = _order()

        store.apply_order_atomically(order, [StockDelta("wh-1", -3), StockDelta("wh-2", -2)])

        stock = {wh.id: wh.stock for wh in store.load_warehouse_snapshot()}
        assert stock == {"wh-1": 17, "wh-2": 3}
        saved = store.get_order("ord-1")
        assert saved == order

    def test_survives_reopen(self, tmp_path):
        store = _store(tmp_path)
        store.apply_order_atomically(_order(), [StockDelta("wh-1", -3)])

        reopened = JsonFulfillmentStore(tmp_path / "data" / "fulfillment.json")
        assert reopened.get_order("ord-1").shipping_cost == Money.of("12.34")
        assert reopened.load_warehouse_snapshot()[0].stock == 17

    def test_negative_stock_is_conflict_and_changes_nothing(self, tmp_path):
        store = _store(tmp_path)
        with pytest.raises(StockConflict, match="Insufficient stock in Two"):
            store.apply_order_atomically(
                _order(), [StockDelta("wh-1", -3), StockDelta("wh-2", -6)]
            )
        stock = {wh.id: wh.stock for wh in store.load_warehouse_snapshot()}
        assert stock == {"wh-1": 20, "wh-2": 5}
        assert store.list_orders() == []

    def test_unknown_warehouse_is_conflict(self, tmp_path):
        store = _store(tmp_path)
        with pytest.raises(StockConflict, match="Unknown warehouse"):
            store.apply_order_atomically(_order(), [StockDelta("wh-9", -1)])
        assert store.list_orders() == []

    def test_duplicate_order_rejected(self, tmp_path):
        store = _store(tmp_path)
        store.apply_order_atomically(_order(), [StockDelta("wh-1", -1)])
        with pytest.raises(DuplicateOrder):
            store.apply_order_atomically(_order(), [StockDelta("wh-1", -1)])
        assert store.load_warehouse_snapshot()[0].stock == 19

    def test_no_temp_files_left_behind(self, tmp_path):
        store = _store(tmp_path)
        store.apply_order_atomically(_order(), [StockDelta("wh-1", -1)])
        assert [p.name for p in (tmp_path / "data").iterdir()] == ["fulfillment.json"]


class TestSeed:

    def test_seeds_default_network(self, tmp_path):
        store = JsonFulfillmentStore(tmp_path / "store.json")
        seed_warehouses(store)
        snapshot = store.load_warehouse_snapshot()
        assert len(snapshot) == 6
        assert sum(wh.stock for wh in snapshot) == sum(wh.stock for wh in DEFAULT_WAREHOUSES)
        assert {wh.name for wh in snapshot} >= {"Los Angeles", "São Paulo", "Hong Kong"}


class TestConcurrentCommitsOnJsonStore:

    def test_stock_never_goes_negative(self, tmp_path):
        store = _store(tmp_path)  # 25 units in total
        handler = CommitOrderHandler(
            make_product(), store, WarehouseAllocator(ShippingCalculator()), OrderValidator()
        )
        barrier = threading.Barrier(2)
        results = []

        def submit():
            barrier.wait()
            results.append(handler.handle(15, 12.0, 12.0))

        threads = [threading.Thread(target=submit) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(isinstance(r, CommittedOrder) for r in results) == 1
        assert sum(isinstance(r, InsufficientStock) for r in results) == 1
        assert all(wh.stock >= 0 for wh in store.load_warehouse_snapshot())
        assert sum(wh.stock for wh in store.load_warehouse_snapshot()) == 10
