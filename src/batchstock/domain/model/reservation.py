"""Reservation value objects.

A ReservationPlan is what a strategy proposes; a ReservationReceipt is
what the inventory service actually committed. Neither is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BatchAllocation:
    """Units taken from a single batch."""

    batch_id: int
    quantity_taken: int


@dataclass(frozen=True)
class ReservationPlan:
    requested_quantity: int
    allocations: tuple[BatchAllocation, ...]

    @property
    def reserved_quantity(self) -> int:
        return sum(a.quantity_taken for a in self.allocations)

    @property
    def fulfilled(self) -> bool:
        return self.reserved_quantity == self.requested_quantity

    @property
    def shortfall(self) -> int:
        return self.requested_quantity - self.reserved_quantity

    @property
    def batch_ids(self) -> list[int]:
        return [a.batch_id for a in self.allocations]


@dataclass(frozen=True)
class ReservationReceipt:
    """A committed reservation, allocations in consumption order."""

    product_id: int
    product_name: str
    quantity: int
    allocations: tuple[BatchAllocation, ...]

    @property
    def batch_ids(self) -> list[int]:
        return [a.batch_id for a in self.allocations]
