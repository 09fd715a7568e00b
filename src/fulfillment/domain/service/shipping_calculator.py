"""Domain service: distance and shipping cost.

Shipping is priced linearly: ``weight (kg) * distance (km) * rate``.
The float product is converted to Money (whole cents) right here, so
nothing downstream ever adds up floating-point dollars.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

from fulfillment.domain.model.value_objects import Coordinates, Distance, Money, Weight
from fulfillment.domain.model.warehouse import Warehouse

EARTH_RADIUS_KM = 6371
SHIPPING_RATE_PER_KG_PER_KM = Decimal("0.01")


def haversine_distance(origin: Coordinates, destination: Coordinates) -> Distance:
    """Great-circle distance between two points, in kilometres."""
    if origin == destination:
        return Distance.zero()

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lon = math.radians(destination.longitude - origin.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return Distance(EARTH_RADIUS_KM * c)


@dataclass(frozen=True)
class LegCost:
    distance: Distance
    cost: Money


@dataclass(frozen=True)
class ShipmentLeg:
    """The part of an order shipped from one warehouse."""

    warehouse: Warehouse
    quantity: int
    distance: Distance
    weight: Weight
    cost: Money


class ShippingCalculator:

    def __init__(self, rate_per_kg_per_km: Decimal = SHIPPING_RATE_PER_KG_PER_KM) -> None:
        self._rate = Decimal(str(rate_per_kg_per_km))

    @property
    def rate_per_kg_per_km(self) -> Decimal:
        return self._rate

    def leg_cost(
        self,
        warehouse: Warehouse,
        destination: Coordinates,
        weight: Weight,
    ) -> LegCost:
        """Distance and cost of shipping *weight* from *warehouse* to *destination*.

        Zero distance or zero weight costs exactly nothing.
        """
        distance = haversine_distance(warehouse.location, destination)
        weight_kg = weight.to_kilograms()

        if distance.kilometers == 0 or weight_kg == 0:
            return LegCost(distance=distance, cost=Money.zero())

        cost_dollars = Decimal(str(weight_kg)) * Decimal(str(distance.kilometers)) * self._rate
        return LegCost(distance=distance, cost=Money.from_dollars(cost_dollars))

    @staticmethod
    def total_cost(legs: list[ShipmentLeg]) -> Money:
        total = Money.zero()
        for leg in legs:
            total = total + leg.cost
        return total
