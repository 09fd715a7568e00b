"""Settings loader for the fulfillment engine (YAML).

Every key is optional; anything missing falls back to the defaults
below.  String values of the form ``${NAME}`` are read from the
environment.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import yaml

from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.product import DiscountTier, Product
from fulfillment.domain.model.value_objects import Money, Weight
from fulfillment.domain.service.order_validator import MAX_SHIPPING_COST_PERCENTAGE
from fulfillment.domain.service.shipping_calculator import SHIPPING_RATE_PER_KG_PER_KM

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_PRODUCT_ID = "SCOS_P1_PRO"
DEFAULT_PRODUCT_NAME = "SCOS Station P1 Pro"
DEFAULT_UNIT_PRICE = "150.00"
DEFAULT_UNIT_WEIGHT_GRAMS = 365
DEFAULT_DISCOUNT_TIERS = (
    (250, 20),
    (100, 15),
    (50, 10),
    (25, 5),
    (0, 0),
)
DEFAULT_DATA_FILE = "data/fulfillment.json"


def _resolve_env(value):
    if not isinstance(value, str):
        return value
    match = _ENV_PATTERN.fullmatch(value.strip())
    if match:
        return os.getenv(match.group(1)) or ""
    return value


def default_product() -> Product:
    return Product(
        id=DEFAULT_PRODUCT_ID,
        name=DEFAULT_PRODUCT_NAME,
        unit_price=Money.of(DEFAULT_UNIT_PRICE),
        unit_weight=Weight(DEFAULT_UNIT_WEIGHT_GRAMS),
        discount_tiers=tuple(DiscountTier(q, pct) for q, pct in DEFAULT_DISCOUNT_TIERS),
    )


@dataclass(frozen=True)
class FulfillmentSettings:
    product: Product
    shipping_rate_per_kg_per_km: Decimal
    max_shipping_cost_percentage: int
    data_file: Path

    @classmethod
    def defaults(cls, base_dir: Path) -> FulfillmentSettings:
        return cls(
            product=default_product(),
            shipping_rate_per_kg_per_km=SHIPPING_RATE_PER_KG_PER_KM,
            max_shipping_cost_percentage=MAX_SHIPPING_COST_PERCENTAGE,
            data_file=base_dir / DEFAULT_DATA_FILE,
        )

    @classmethod
    def load(cls, path: Path, base_dir: Path) -> FulfillmentSettings:
        """Read settings from *path*; relative file paths resolve against *base_dir*.

        A missing file yields the defaults.  Anything unparseable raises
        ``ValidationError``.
        """
        if not path.exists():
            return cls.defaults(base_dir)

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ValidationError(f"Settings file {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValidationError(f"Settings file {path} must contain a mapping")

        try:
            return cls._from_mapping(data, base_dir)
        except (KeyError, TypeError, ValueError, AttributeError, ArithmeticError) as exc:
            raise ValidationError(f"Invalid settings in {path}: {exc!r}") from exc

    @classmethod
    def _from_mapping(cls, data: dict, base_dir: Path) -> FulfillmentSettings:
        product = cls._product_from(data.get("product") or {})

        shipping = data.get("shipping") or {}
        rate = _resolve_env(shipping.get("rate_per_kg_per_km"))
        shipping_rate = (
            Decimal(str(rate)) if rate not in (None, "") else SHIPPING_RATE_PER_KG_PER_KM
        )

        validation = data.get("validation") or {}
        max_pct = _resolve_env(validation.get("max_shipping_cost_percentage"))
        max_percentage = int(max_pct) if max_pct not in (None, "") else MAX_SHIPPING_COST_PERCENTAGE

        storage = data.get("storage") or {}
        data_file = Path(_resolve_env(storage.get("data_file")) or DEFAULT_DATA_FILE)
        if not data_file.is_absolute():
            data_file = base_dir / data_file

        return cls(
            product=product,
            shipping_rate_per_kg_per_km=shipping_rate,
            max_shipping_cost_percentage=max_percentage,
            data_file=data_file,
        )

    @staticmethod
    def _product_from(raw: dict) -> Product:
        tiers_raw = raw.get("discount_tiers")
        if tiers_raw is None:
            tiers = tuple(DiscountTier(q, pct) for q, pct in DEFAULT_DISCOUNT_TIERS)
        else:
            tiers = tuple(
                DiscountTier(int(t["min_quantity"]), int(t["discount_percentage"]))
                for t in tiers_raw
            )
        return Product(
            id=_resolve_env(raw.get("id")) or DEFAULT_PRODUCT_ID,
            name=_resolve_env(raw.get("name")) or DEFAULT_PRODUCT_NAME,
            unit_price=Money.of(_resolve_env(raw.get("unit_price", DEFAULT_UNIT_PRICE))),
            unit_weight=Weight(
                float(_resolve_env(raw.get("unit_weight_grams", DEFAULT_UNIT_WEIGHT_GRAMS)))
            ),
            discount_tiers=tiers,
        )
