"""Domain service: Warehouse Allocator.

Decides which warehouses ship how many units so the total shipping cost
is as low as possible.  Shipping cost is linear in the number of units,
so filling the order from the cheapest-per-unit warehouse first and
moving on to the next one only when it runs dry is optimal.

The warehouse snapshot passed in is read-only; the allocator describes
the stock it would take as ``StockDelta`` values and leaves applying
them to the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fulfillment.domain.model.product import Product
from fulfillment.domain.model.value_objects import Coordinates, Distance, Money
from fulfillment.domain.model.warehouse import StockDelta, Warehouse
from fulfillment.domain.service.shipping_calculator import ShipmentLeg, ShippingCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllocationResult:
    """A shipment plan, cheapest leg first.

    An unfulfilled result still carries the legs and cost of whatever
    could be allocated.
    """

    legs: tuple[ShipmentLeg, ...]
    total_shipping_cost: Money
    fulfilled: bool
    remaining_quantity: int

    @property
    def allocated_quantity(self) -> int:
        return sum(leg.quantity for leg in self.legs)

    def stock_deltas(self) -> list[StockDelta]:
        """One negative delta per leg."""
        return [StockDelta(leg.warehouse.id, -leg.quantity) for leg in self.legs]


@dataclass(frozen=True)
class _Candidate:
    warehouse: Warehouse
    distance: Distance
    cost_per_unit: Money


class WarehouseAllocator:

    def __init__(self, shipping_calculator: ShippingCalculator) -> None:
        self._shipping_calculator = shipping_calculator

    def allocate(
        self,
        required_quantity: int,
        product: Product,
        destination: Coordinates,
        warehouses: list[Warehouse],
    ) -> AllocationResult:
        """Build the cheapest shipment plan for *required_quantity* units.

        Steps:
        1. Price one unit from every warehouse that has stock.
        2. Stable-sort by per-unit cost (ties keep snapshot order).
        3. Take as much as possible from each warehouse in that order.
        """
        if required_quantity <= 0:
            return AllocationResult(
                legs=(), total_shipping_cost=Money.zero(), fulfilled=True, remaining_quantity=0
            )

        if product.unit_weight.grams <= 0:
            logger.warning(
                "Product %s has no weight; shipping cannot be priced", product.id
            )
            return AllocationResult(
                legs=(),
                total_shipping_cost=Money.zero(),
                fulfilled=False,
                remaining_quantity=required_quantity,
            )

        candidates = sorted(
            self._price_per_unit(warehouses, destination, product),
            key=lambda c: c.cost_per_unit.amount_in_cents,
        )

        legs: list[ShipmentLeg] = []
        remaining = required_quantity

        for candidate in candidates:
            if remaining <= 0:
                break
            take = min(remaining, candidate.warehouse.stock)
            legs.append(
                ShipmentLeg(
                    warehouse=candidate.warehouse,
                    quantity=take,
                    distance=candidate.distance,
                    weight=product.total_weight(take),
                    cost=candidate.cost_per_unit * take,
                )
            )
            remaining -= take

        total_cost = self._shipping_calculator.total_cost(legs)
        result = AllocationResult(
            legs=tuple(legs),
            total_shipping_cost=total_cost,
            fulfilled=remaining == 0,
            remaining_quantity=max(remaining, 0),
        )
        logger.debug(
            "Allocated %d of %d units over %d leg(s), shipping %s",
            result.allocated_quantity,
            required_quantity,
            len(legs),
            total_cost,
        )
        return result

    # --- Internal helpers -----------------------------------------------------

    def _price_per_unit(
        self,
        warehouses: list[Warehouse],
        destination: Coordinates,
        product: Product,
    ) -> list[_Candidate]:
        candidates: list[_Candidate] = []
        for warehouse in warehouses:
            if warehouse.stock <= 0:
                continue
            leg_cost = self._shipping_calculator.leg_cost(
                warehouse, destination, product.unit_weight
            )
            candidates.append(
                _Candidate(
                    warehouse=warehouse,
                    distance=leg_cost.distance,
                    cost_per_unit=leg_cost.cost,
                )
            )
        return candidates
