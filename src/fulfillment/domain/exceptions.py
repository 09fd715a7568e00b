"""Domain-level exceptions.

Invariant violations are expressed as subclasses of DomainException so
the CLI layer can catch them uniformly and display user-friendly
messages.

Expected business outcomes (insufficient stock, shipping cost too high)
are *not* exceptions; they are returned as outcome values by the
application handlers.  StoreError and its subclasses are raised by the
persistence collaborator and are passed through unchanged.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StoreError(Exception):
    """Base class for faults surfaced by the fulfillment store."""


class Unavailable(StoreError):
    """The store could not be read or written."""


class StockConflict(StoreError):
    """A stock delta could not be applied (unknown warehouse or negative stock)."""


class DuplicateOrder(StoreError):
    """An order with the same order number already exists."""
