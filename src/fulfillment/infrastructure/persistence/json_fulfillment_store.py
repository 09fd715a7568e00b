"""JSON-file-backed implementation of FulfillmentStore.

Warehouses and orders live in one JSON document so that an order and
its stock deltas are written by a single ``os.replace``; either the
whole new document is visible, or the old one is.

A re-entrant lock serialises commits within the process.  Nothing here
coordinates separate processes writing the same file.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from fulfillment.domain.exceptions import (
    DuplicateOrder,
    StockConflict,
    Unavailable,
    ValidationError,
)
from fulfillment.domain.model.order import Order
from fulfillment.domain.model.value_objects import Coordinates, Money
from fulfillment.domain.model.warehouse import StockDelta, Warehouse
from fulfillment.domain.repository.fulfillment_store import FulfillmentStore


class JsonFulfillmentStore(FulfillmentStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    # --- FulfillmentStore interface -------------------------------------------

    def load_warehouse_snapshot(self) -> list[Warehouse]:
        with self._lock:
            document = self._load_raw()
        return [self._warehouse_to_domain(raw) for raw in document["warehouses"]]

    def apply_order_atomically(self, order: Order, stock_deltas: list[StockDelta]) -> None:
        with self._lock:
            document = self._load_raw()

            if any(raw["order_number"] == order.order_number for raw in document["orders"]):
                raise DuplicateOrder(f"Order {order.order_number} already exists")

            warehouses = {
                raw["id"]: self._warehouse_to_domain(raw) for raw in document["warehouses"]
            }
            for delta in stock_deltas:
                current = warehouses.get(delta.warehouse_id)
                if current is None:
                    raise StockConflict(f"Unknown warehouse '{delta.warehouse_id}'")
                try:
                    warehouses[delta.warehouse_id] = current.with_stock_change(
                        delta.quantity_change
                    )
                except ValidationError as exc:
                    raise StockConflict(str(exc)) from exc

            document["warehouses"] = [
                self._warehouse_to_raw(warehouses[raw["id"]]) for raw in document["warehouses"]
            ]
            document["orders"].append(self._order_to_raw(order))
            self._persist_raw(document)

    @contextmanager
    def unit_of_work(self) -> Iterator[None]:
        with self._lock:
            yield

    def get_order(self, order_number: str) -> Order | None:
        with self._lock:
            document = self._load_raw()
        for raw in document["orders"]:
            if raw["order_number"] == order_number:
                return self._order_to_domain(raw)
        return None

    def list_orders(self) -> list[Order]:
        with self._lock:
            document = self._load_raw()
        return [self._order_to_domain(raw) for raw in document["orders"]]

    def save_warehouses(self, warehouses: list[Warehouse]) -> None:
        with self._lock:
            document = self._load_raw()
            document["warehouses"] = [self._warehouse_to_raw(wh) for wh in warehouses]
            self._persist_raw(document)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _warehouse_to_raw(warehouse: Warehouse) -> dict:
        return {
            "id": warehouse.id,
            "name": warehouse.name,
            "latitude": warehouse.location.latitude,
            "longitude": warehouse.location.longitude,
            "stock": warehouse.stock,
        }

    @staticmethod
    def _warehouse_to_domain(raw: dict) -> Warehouse:
        try:
            return Warehouse(
                id=raw["id"],
                name=raw["name"],
                location=Coordinates(raw["latitude"], raw["longitude"]),
                stock=raw["stock"],
            )
        except (KeyError, ValidationError) as exc:
            raise Unavailable(f"Corrupt warehouse record: {raw!r}") from exc

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        return {
            "order_number": order.order_number,
            "product_id": order.product_id,
            "quantity": order.quantity,
            "shipping_latitude": order.shipping_address.latitude,
            "shipping_longitude": order.shipping_address.longitude,
            "total_price_cents": order.total_price.amount_in_cents,
            "discount_percentage": order.discount_percentage,
            "shipping_cost_cents": order.shipping_cost.amount_in_cents,
            "currency": order.total_price.currency,
            "submitted_at": order.submitted_at.isoformat(),
        }

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        return Order(
            order_number=raw["order_number"],
            product_id=raw["product_id"],
            quantity=raw["quantity"],
            shipping_address=Coordinates(raw["shipping_latitude"], raw["shipping_longitude"]),
            total_price=Money(raw["total_price_cents"], currency),
            discount_percentage=raw["discount_percentage"],
            shipping_cost=Money(raw["shipping_cost_cents"], currency),
            submitted_at=datetime.fromisoformat(raw["submitted_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        try:
            document = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise Unavailable(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(document, dict):
            raise Unavailable(f"Unexpected content in {self._file_path}")
        document.setdefault("warehouses", [])
        document.setdefault("orders", [])
        return document

    def _persist_raw(self, document: dict) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(document, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise Unavailable(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({"warehouses": [], "orders": []}, indent=2) + "\n",
                encoding="utf-8",
            )
