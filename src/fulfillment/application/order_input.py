"""Input checks shared by the quote and commit use cases."""

from __future__ import annotations

from fulfillment.application.outcomes import InvalidInput
from fulfillment.domain.exceptions import ValidationError
from fulfillment.domain.model.value_objects import Coordinates


def validate_order_input(
    quantity: object,
    latitude: object,
    longitude: object,
) -> tuple[int, Coordinates] | InvalidInput:
    """Return ``(quantity, destination)`` or the reason the input is rejected."""
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        return InvalidInput("Quantity must be a positive integer.")

    try:
        destination = Coordinates(latitude, longitude)  # type: ignore[arg-type]
    except ValidationError as exc:
        return InvalidInput(str(exc))

    return quantity, destination
