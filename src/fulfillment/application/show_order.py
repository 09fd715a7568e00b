"""Application service: Show Order use case (query)."""

from __future__ import annotations

from fulfillment.application.dto import OrderDTO
from fulfillment.domain.exceptions import EntityNotFoundError
from fulfillment.domain.model.order import Order
from fulfillment.domain.repository.fulfillment_store import FulfillmentStore


class ShowOrderHandler:

    def __init__(self, store: FulfillmentStore) -> None:
        self._store = store

    def handle(self, order_number: str) -> OrderDTO:
        order = self._store.get_order(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_number}' not found")
        return self._to_dto(order)

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            order_number=order.order_number,
            product_id=order.product_id,
            quantity=order.quantity,
            latitude=order.shipping_address.latitude,
            longitude=order.shipping_address.longitude,
            total_price=str(order.total_price),
            discount_percentage=order.discount_percentage,
            shipping_cost=str(order.shipping_cost),
            submitted_at=order.submitted_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
