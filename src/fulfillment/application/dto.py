"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money is formatted,
e.g. ``"$6750.00"``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShipmentLegDTO:
    """Output: one warehouse's share of a shipment."""

    warehouse_id: str
    warehouse_name: str
    quantity: int
    distance: str  # formatted, e.g. "3936.18 km"
    cost: str


@dataclass(frozen=True)
class QuoteResult:
    """Output: price and shipping for a prospective order."""

    total_price: str
    discount_percentage: int
    shipping_cost: str
    is_valid: bool
    fulfilled: bool
    remaining_quantity: int
    legs: list[ShipmentLegDTO]


@dataclass(frozen=True)
class CommittedOrder:
    """Output: a successfully submitted order."""

    order_number: str
    total_price: str
    discount_percentage: int
    shipping_cost: str
    submitted_at: str  # ISO 8601


@dataclass(frozen=True)
class OrderDTO:
    """Output: a persisted order as displayed to the user."""

    order_number: str
    product_id: str
    quantity: int
    latitude: float
    longitude: float
    total_price: str
    discount_percentage: int
    shipping_cost: str
    submitted_at: str


@dataclass(frozen=True)
class WarehouseDTO:
    """Output: a warehouse and its current stock."""

    id: str
    name: str
    latitude: float
    longitude: float
    stock: int
