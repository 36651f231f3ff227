"""Batch aggregate: a dated lot of stock for one product.

Batches are never deleted. A batch that reaches zero stays in the store
as a ledger entry; only a committed reservation lowers its quantity.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from batchstock.domain.exceptions import InvalidRequestError


@dataclass
class Batch:
    """Aggregate root for one stock lot.

    Invariants:
    - ``remaining_quantity`` is always >= 0
    - ``batch_id``, ``product_id`` and ``expiry_date`` never change
    """

    batch_id: int
    product_id: int
    product_name: str
    remaining_quantity: int
    expiry_date: date

    def __post_init__(self) -> None:
        if self.remaining_quantity < 0:
            raise InvalidRequestError(
                f"Batch {self.batch_id} quantity cannot be negative, "
                f"got {self.remaining_quantity}"
            )

    @property
    def is_available(self) -> bool:
        return self.remaining_quantity > 0

    def deduct(self, quantity: int) -> None:
        """Remove committed stock from this batch.

        Raises InvalidRequestError rather than letting the quantity go
        negative.
        """
        if quantity <= 0:
            raise InvalidRequestError("Deduct quantity must be positive")
        if quantity > self.remaining_quantity:
            raise InvalidRequestError(
                f"Cannot deduct {quantity} from batch {self.batch_id}, "
                f"only {self.remaining_quantity} remaining"
            )
        self.remaining_quantity -= quantity


@dataclass(frozen=True)
class InventorySnapshot:
    """Point-in-time view of a product's batches, in strategy order."""

    product_id: int
    product_name: str
    batches: tuple[Batch, ...]

    @property
    def total_available(self) -> int:
        return sum(b.remaining_quantity for b in self.batches)
