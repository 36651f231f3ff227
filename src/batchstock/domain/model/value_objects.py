"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from batchstock.domain.exceptions import InvalidRequestError


def _is_int(value: object) -> bool:
    # bool is an int subclass; True must not pass as product 1
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class ProductId:
    """A positive integer product identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value is None:
            raise InvalidRequestError("Product ID cannot be null")
        if not _is_int(self.value):
            raise InvalidRequestError(
                f"Product ID must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidRequestError(f"Product ID must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order or reserve zero or
    negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value is None:
            raise InvalidRequestError("Quantity cannot be null")
        if not _is_int(self.value):
            raise InvalidRequestError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidRequestError(f"Quantity must be positive. Received: {self.value}")

    def __str__(self) -> str:
        return str(self.value)
