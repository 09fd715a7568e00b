"""Application service: Show Warehouses use case (query)."""

from __future__ import annotations

from fulfillment.application.dto import WarehouseDTO
from fulfillment.domain.repository.fulfillment_store import FulfillmentStore


class ShowWarehousesHandler:

    def __init__(self, store: FulfillmentStore) -> None:
        self._store = store

    def handle(self) -> list[WarehouseDTO]:
        return [
            WarehouseDTO(
                id=wh.id,
                name=wh.name,
                latitude=wh.location.latitude,
                longitude=wh.location.longitude,
                stock=wh.stock,
            )
            for wh in self._store.load_warehouse_snapshot()
        ]
