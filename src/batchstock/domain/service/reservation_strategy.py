"""Domain service: batch selection strategies.

Given a product's batches and a requested quantity, decide which batches
to draw from and how much to take from each. Selection is pure: it
never mutates a batch, it only proposes a ReservationPlan.

FIFO draws from the earliest-expiring batch first.
LIFO is the inverse and draws from the latest-expiring batch first.
Batches sharing an expiry date keep their insertion order
under both strategies.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from batchstock.domain.exceptions import InvalidRequestError
from batchstock.domain.model.batch import Batch
from batchstock.domain.model.reservation import BatchAllocation, ReservationPlan
from batchstock.domain.model.value_objects import Quantity


class ReservationStrategy(Enum):
    FIFO = "fifo"
    LIFO = "lifo"

    @staticmethod
    def parse(raw: str | ReservationStrategy) -> ReservationStrategy:
        """Accept ``"fifo"`` / ``"LIFO"`` etc. and return the member."""
        if isinstance(raw, ReservationStrategy):
            return raw
        try:
            return ReservationStrategy(str(raw).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in ReservationStrategy)
            raise InvalidRequestError(
                f"Unknown reservation strategy {raw!r} (expected one of: {choices})"
            ) from None


def order_batches(strategy: ReservationStrategy, batches: Iterable[Batch]) -> list[Batch]:
    """Return batches in the order the strategy consumes them.

    ``sorted`` is stable, so equal expiry dates keep insertion order.
    LIFO sorts descending by key instead of reversing an ascending sort,
    which would flip the tie order.
    """
    if strategy is ReservationStrategy.FIFO:
        return sorted(batches, key=lambda b: b.expiry_date)
    if strategy is ReservationStrategy.LIFO:
        return sorted(batches, key=lambda b: b.expiry_date, reverse=True)
    raise InvalidRequestError(f"Unsupported reservation strategy: {strategy!r}")


def select(
    strategy: ReservationStrategy,
    batches: Iterable[Batch],
    requested_quantity: int,
) -> ReservationPlan:
    """Plan which batches cover ``requested_quantity``.

    Zero-quantity batches never appear in the plan. When the batches
    cannot cover the request the plan comes back with
    ``fulfilled == False`` and records what *could* have been taken;
    callers must not commit such a plan.
    """
    needed = Quantity(requested_quantity).value
    allocations: list[BatchAllocation] = []

    for batch in order_batches(strategy, (b for b in batches if b.is_available)):
        if needed == 0:
            break
        taken = min(batch.remaining_quantity, needed)
        if taken > 0:
            allocations.append(BatchAllocation(batch.batch_id, taken))
            needed -= taken

    return ReservationPlan(
        requested_quantity=requested_quantity,
        allocations=tuple(allocations),
    )
