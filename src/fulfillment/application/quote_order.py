"""Application service: Quote Order use case (query).

Prices an order and plans its shipment against the current warehouse
snapshot without changing anything, so it can be repeated freely.
"""

from __future__ import annotations

import logging

from fulfillment.application.dto import QuoteResult, ShipmentLegDTO
from fulfillment.application.order_input import validate_order_input
from fulfillment.application.outcomes import InvalidInput, QuoteOutcome
from fulfillment.domain.model.product import Product
from fulfillment.domain.repository.fulfillment_store import FulfillmentStore
from fulfillment.domain.service.order_validator import OrderValidator
from fulfillment.domain.service.shipping_calculator import ShipmentLeg
from fulfillment.domain.service.warehouse_allocator import WarehouseAllocator

logger = logging.getLogger(__name__)


class QuoteOrderHandler:

    def __init__(
        self,
        product: Product,
        store: FulfillmentStore,
        allocator: WarehouseAllocator,
        validator: OrderValidator,
    ) -> None:
        self._product = product
        self._store = store
        self._allocator = allocator
        self._validator = validator

    def handle(self, quantity: int, latitude: float, longitude: float) -> QuoteOutcome:
        """Quote an order.

        An order that cannot be fully sourced is reported invalid even
        when the partial shipping cost alone would pass.
        """
        checked = validate_order_input(quantity, latitude, longitude)
        if isinstance(checked, InvalidInput):
            logger.info("Quote rejected: %s", checked.reason)
            return checked
        quantity, destination = checked

        total_price = self._product.total_price(quantity)
        discount = self._product.discount_percentage(quantity)

        warehouses = self._store.load_warehouse_snapshot()
        allocation = self._allocator.allocate(quantity, self._product, destination, warehouses)

        shipping_cost = allocation.total_shipping_cost
        cost_ok = self._validator.is_order_valid(total_price, shipping_cost)

        return QuoteResult(
            total_price=str(total_price),
            discount_percentage=discount,
            shipping_cost=str(shipping_cost),
            is_valid=cost_ok and allocation.fulfilled,
            fulfilled=allocation.fulfilled,
            remaining_quantity=allocation.remaining_quantity,
            legs=[to_leg_dto(leg) for leg in allocation.legs],
        )


def to_leg_dto(leg: ShipmentLeg) -> ShipmentLegDTO:
    return ShipmentLegDTO(
        warehouse_id=leg.warehouse.id,
        warehouse_name=leg.warehouse.name,
        quantity=leg.quantity,
        distance=str(leg.distance),
        cost=str(leg.cost),
    )
