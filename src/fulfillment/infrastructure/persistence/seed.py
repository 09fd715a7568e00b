"""Initial warehouse network and stock levels."""

from __future__ import annotations

from fulfillment.domain.model.value_objects import Coordinates
from fulfillment.domain.model.warehouse import Warehouse
from fulfillment.domain.repository.fulfillment_store import FulfillmentStore

DEFAULT_WAREHOUSES: tuple[Warehouse, ...] = (
    Warehouse("wh-la", "Los Angeles", Coordinates(33.9425, -118.408056), 355),
    Warehouse("wh-nyc", "New York", Coordinates(40.639722, -73.778889), 578),
    Warehouse("wh-gru", "São Paulo", Coordinates(-23.435556, -46.473056), 265),
    Warehouse("wh-cdg", "Paris", Coordinates(49.009722, 2.547778), 694),
    Warehouse("wh-waw", "Warsaw", Coordinates(52.165833, 20.967222), 245),
    Warehouse("wh-hkg", "Hong Kong", Coordinates(22.308889, 113.914444), 419),
)


def seed_warehouses(store: FulfillmentStore) -> list[Warehouse]:
    """Reset the store's warehouses to the default network."""
    warehouses = list(DEFAULT_WAREHOUSES)
    store.save_warehouses(warehouses)
    return warehouses
