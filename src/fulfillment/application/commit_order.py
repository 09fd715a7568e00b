"""Application service: Commit Order use case.

Orchestrates pricing, warehouse allocation and the shipping-cost rule,
then hands the new Order and its stock deltas to the store in a single
atomic call.  Everything from re-reading the stock to persisting runs
inside the store's unit of work, so two commits never reserve the same
units.

Ordering of the checks matters: an order that cannot be fully sourced
is rejected as InsufficientStock before the shipping-cost rule is
looked at.
"""

from __future__ import annotations

import logging
import uuid

from fulfillment.application.dto import CommittedOrder
from fulfillment.application.order_input import validate_order_input
from fulfillment.application.outcomes import (
    CommitOutcome,
    InsufficientStock,
    InvalidInput,
    ShippingCostExceeded,
)
from fulfillment.domain.exceptions import StoreError
from fulfillment.domain.model.order import Order
from fulfillment.domain.model.product import Product
from fulfillment.domain.repository.fulfillment_store import FulfillmentStore
from fulfillment.domain.service.order_validator import OrderValidator
from fulfillment.domain.service.warehouse_allocator import WarehouseAllocator

logger = logging.getLogger(__name__)


def new_order_number() -> str:
    return str(uuid.uuid4())


class CommitOrderHandler:

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

    def handle(self, quantity: int, latitude: float, longitude: float) -> CommitOutcome:
        """Submit an order.

        Steps:
        1. Check the input shape.
        2. Re-read stock inside the unit of work and allocate.
        3. Reject if not fully fulfillable, then if shipping is too costly.
        4. Persist the order and stock deltas atomically.

        Store faults propagate unchanged.
        """
        checked = validate_order_input(quantity, latitude, longitude)
        if isinstance(checked, InvalidInput):
            logger.info("Commit rejected: %s", checked.reason)
            return checked
        quantity, destination = checked

        with self._store.unit_of_work():
            total_price = self._product.total_price(quantity)
            discount = self._product.discount_percentage(quantity)

            warehouses = self._store.load_warehouse_snapshot()
            allocation = self._allocator.allocate(
                quantity, self._product, destination, warehouses
            )

            if not allocation.fulfilled:
                outcome = InsufficientStock(
                    requested=quantity,
                    available=quantity - allocation.remaining_quantity,
                )
                logger.info(outcome.message)
                return outcome

            shipping_cost = allocation.total_shipping_cost
            if not self._validator.is_order_valid(total_price, shipping_cost):
                exceeded = ShippingCostExceeded(
                    shipping_cost=str(shipping_cost),
                    total_price=str(total_price),
                    max_allowed=str(self._validator.max_allowed_shipping_cost(total_price)),
                )
                logger.info(exceeded.message)
                return exceeded

            order = Order.create(
                order_number=new_order_number(),
                product_id=self._product.id,
                quantity=quantity,
                shipping_address=destination,
                total_price=total_price,
                discount_percentage=discount,
                shipping_cost=shipping_cost,
            )

            try:
                self._store.apply_order_atomically(order, allocation.stock_deltas())
            except StoreError as exc:
                logger.warning(
                    "Store rejected order %s: %s: %s",
                    order.order_number,
                    type(exc).__name__,
                    exc,
                )
                raise

        logger.info(
            "Order %s committed: %d unit(s), %s, shipping %s",
            order.order_number,
            order.quantity,
            order.total_price,
            order.shipping_cost,
        )
        return CommittedOrder(
            order_number=order.order_number,
            total_price=str(order.total_price),
            discount_percentage=order.discount_percentage,
            shipping_cost=str(order.shipping_cost),
            submitted_at=order.submitted_at.isoformat(),
        )
