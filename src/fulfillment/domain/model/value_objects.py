"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from fulfillment.domain.exceptions import ValidationError


def _round_to_int(value: Decimal) -> int:
    """Round half-up (away from zero) to the nearest integer."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _to_decimal(value: int | float | Decimal | str) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Expected a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Expected a finite number, got {value!r}")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Expected a finite number, got {value!r}")
    return result


def _is_real(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Money:
    """Monetary amount stored as an integer number of minor units (cents).

    Every operation that produces a fractional amount re-rounds to the
    nearest cent (half-up), so a float never ends up inside a Money.
    """

    amount_in_cents: int
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount_in_cents, int) or isinstance(
            self.amount_in_cents, bool
        ):
            raise ValidationError(
                "Money amount must be an integer number of cents, "
                f"got {type(self.amount_in_cents).__name__}"
            )
        if self.amount_in_cents < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount_in_cents}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount_in_cents + other.amount_in_cents, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount_in_cents - other.amount_in_cents
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int | float | Decimal) -> Money:
        if isinstance(factor, int) and not isinstance(factor, bool):
            return Money(self.amount_in_cents * factor, self.currency)
        scaled = Decimal(self.amount_in_cents) * _to_decimal(factor)
        return Money(_round_to_int(scaled), self.currency)

    def divide(self, divisor: int | float | Decimal) -> Money:
        value = _to_decimal(divisor)
        if value == 0:
            raise ValidationError("Cannot divide money by zero")
        return Money(_round_to_int(Decimal(self.amount_in_cents) / value), self.currency)

    def apply_discount_percentage(self, percentage: int | float | Decimal) -> Money:
        """Reduce the amount by *percentage* percent (10 means 10 %)."""
        pct = _to_decimal(percentage)
        if pct < 0 or pct > 100:
            raise ValidationError(
                f"Discount percentage must be between 0 and 100, got {percentage}"
            )
        return self * ((Decimal(100) - pct) / Decimal(100))

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount_in_cents < other.amount_in_cents

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount_in_cents <= other.amount_in_cents

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount_in_cents > other.amount_in_cents

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount_in_cents >= other.amount_in_cents

    # --- Conversion / display -------------------------------------------------

    def to_dollars(self) -> Decimal:
        return Decimal(self.amount_in_cents) / Decimal(100)

    def __str__(self) -> str:
        return f"${self.to_dollars():.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def from_dollars(amount: str | float | int | Decimal) -> Money:
        """Convert a dollar amount to cents, rounding to the nearest cent."""
        return Money(_round_to_int(_to_decimal(amount) * 100))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient alias of ``from_dollars`` used throughout the tests."""
        return Money.from_dollars(amount)

    @staticmethod
    def zero() -> Money:
        return Money(0)


@dataclass(frozen=True)
class Weight:
    """A non-negative weight measured in grams."""

    grams: float

    def __post_init__(self) -> None:
        if not _is_real(self.grams) or not math.isfinite(self.grams):
            raise ValidationError(f"Weight must be a finite number, got {self.grams!r}")
        if self.grams < 0:
            raise ValidationError("Weight cannot be negative")

    def __add__(self, other: Weight) -> Weight:
        return Weight(self.grams + other.grams)

    def __sub__(self, other: Weight) -> Weight:
        result = self.grams - other.grams
        if result < 0:
            raise ValidationError("Resulting weight cannot be negative")
        return Weight(result)

    def __mul__(self, factor: int | float) -> Weight:
        if not _is_real(factor) or not math.isfinite(factor):
            raise ValidationError(f"Weight factor must be a finite number, got {factor!r}")
        if factor < 0:
            raise ValidationError("Cannot multiply weight by a negative factor")
        return Weight(self.grams * factor)

    def to_kilograms(self) -> float:
        return self.grams / 1000

    def __str__(self) -> str:
        return f"{self.to_kilograms():.3f} kg"

    @staticmethod
    def from_kilograms(kilograms: int | float) -> Weight:
        if not _is_real(kilograms):
            raise ValidationError(f"Weight must be a finite number, got {kilograms!r}")
        return Weight(kilograms * 1000)

    @staticmethod
    def zero() -> Weight:
        return Weight(0)


@dataclass(frozen=True)
class Distance:
    """A non-negative great-circle distance in kilometres."""

    kilometers: float

    def __post_init__(self) -> None:
        if not _is_real(self.kilometers) or not math.isfinite(self.kilometers):
            raise ValidationError(
                f"Distance must be a finite number, got {self.kilometers!r}"
            )
        if self.kilometers < 0:
            raise ValidationError("Distance cannot be negative")

    def __add__(self, other: Distance) -> Distance:
        return Distance(self.kilometers + other.kilometers)

    def __str__(self) -> str:
        return f"{self.kilometers:.2f} km"

    @staticmethod
    def zero() -> Distance:
        return Distance(0)


@dataclass(frozen=True)
class Coordinates:
    """A point on the globe in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not _is_real(self.latitude) or not -90 <= self.latitude <= 90:
            raise ValidationError(
                f"Invalid latitude: {self.latitude!r}. Must be between -90 and 90."
            )
        if not _is_real(self.longitude) or not -180 <= self.longitude <= 180:
            raise ValidationError(
                f"Invalid longitude: {self.longitude!r}. Must be between -180 and 180."
            )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"
