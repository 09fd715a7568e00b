"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from fulfillment.application.commit_order import CommitOrderHandler
from fulfillment.application.quote_order import QuoteOrderHandler
from fulfillment.domain.service.order_validator import OrderValidator
from fulfillment.domain.service.shipping_calculator import ShippingCalculator
from fulfillment.domain.service.warehouse_allocator import WarehouseAllocator
from fulfillment.infrastructure.config import FulfillmentSettings
from fulfillment.infrastructure.persistence.json_fulfillment_store import (
    JsonFulfillmentStore,
)

# Resolve project paths relative to the repo root.
# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_CONFIG_PATH = _PROJECT_ROOT / "config" / "fulfillment.yaml"


def settings() -> FulfillmentSettings:
    config_path = Path(os.getenv("FULFILLMENT_CONFIG") or _CONFIG_PATH)
    loaded = FulfillmentSettings.load(config_path, base_dir=_PROJECT_ROOT)
    data_file = os.getenv("FULFILLMENT_DATA_FILE")
    if data_file:
        return FulfillmentSettings(
            product=loaded.product,
            shipping_rate_per_kg_per_km=loaded.shipping_rate_per_kg_per_km,
            max_shipping_cost_percentage=loaded.max_shipping_cost_percentage,
            data_file=Path(data_file),
        )
    return loaded


@lru_cache(maxsize=None)
def _store_for(data_file: Path) -> JsonFulfillmentStore:
    # One store (and one lock) per data file in this process.
    return JsonFulfillmentStore(data_file)


def fulfillment_store(cfg: FulfillmentSettings | None = None) -> JsonFulfillmentStore:
    cfg = cfg or settings()
    return _store_for(cfg.data_file.resolve())


def _services(cfg: FulfillmentSettings) -> tuple[WarehouseAllocator, OrderValidator]:
    allocator = WarehouseAllocator(ShippingCalculator(cfg.shipping_rate_per_kg_per_km))
    validator = OrderValidator(cfg.max_shipping_cost_percentage)
    return allocator, validator


def quote_order_handler() -> QuoteOrderHandler:
    cfg = settings()
    allocator, validator = _services(cfg)
    return QuoteOrderHandler(cfg.product, fulfillment_store(cfg), allocator, validator)


def commit_order_handler() -> CommitOrderHandler:
    cfg = settings()
    allocator, validator = _services(cfg)
    return CommitOrderHandler(cfg.product, fulfillment_store(cfg), allocator, validator)
