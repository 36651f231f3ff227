"""Domain service: Inventory Reservation.

The only component allowed to change batch quantities. It answers two
questions for the order side: "what stock does this product have?" and
"take N units of it".

Reservation uses a two-phase approach (plan-then-mutate) so a product
is never left partially reserved: the whole plan is validated against
live batches before any batch is touched, and every touched batch is
written back in a single ``save_all`` call.

Concurrent reservations on the same product are serialised by a
per-product lock held across read, plan and write, so two callers can
never both see the same units as available. The repository's own
``lock()`` is held inside it, which extends the guarantee to other
processes sharing the same store.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from batchstock.domain.exceptions import (
    InsufficientInventoryError,
    ProductNotFoundError,
)
from batchstock.domain.model.batch import Batch, InventorySnapshot
from batchstock.domain.model.reservation import ReservationReceipt
from batchstock.domain.model.value_objects import ProductId, Quantity
from batchstock.domain.repository.batch_repository import BatchRepository
from batchstock.domain.service.reservation_strategy import (
    ReservationStrategy,
    order_batches,
    select,
)

logger = logging.getLogger(__name__)


class InventoryReservationService:

    def __init__(
        self,
        batch_repo: BatchRepository,
        strategy: ReservationStrategy = ReservationStrategy.FIFO,
    ) -> None:
        self._batch_repo = batch_repo
        self._strategy = strategy
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def strategy(self) -> ReservationStrategy:
        return self._strategy

    def get_batches(self, product_id: int) -> InventorySnapshot:
        """Return the product's batches ordered by the active strategy.

        Zero-quantity batches are included; they are part of the ledger.
        """
        pid = ProductId(product_id).value
        batches = self._load(pid)
        logger.info(
            "Found %d batches for product ID: %s (%s)",
            len(batches), pid, self._strategy.value,
        )
        return InventorySnapshot(
            product_id=pid,
            product_name=batches[0].product_name,
            batches=tuple(order_batches(self._strategy, batches)),
        )

    def reserve(
        self,
        product_id: int,
        quantity: int,
        batch_hint: list[int] | None = None,
    ) -> ReservationReceipt:
        """Reserve ``quantity`` units of a product from its live batches.

        ``batch_hint`` is whatever the caller computed from an earlier
        read. It is only logged: the plan is always rebuilt from the
        current batches because they may have changed since.

          Phase 1, plan: load live batches under the product lock and
                    let the strategy build a plan. An unfulfilled plan
                    raises before anything is mutated.
          Phase 2, mutate and persist: deduct each allocation and save
                    all touched batches together.
        """
        pid = ProductId(product_id).value
        qty = Quantity(quantity).value

        with self._lock_for(pid), self._batch_repo.lock():
            batches = self._load(pid)
            plan = select(self._strategy, batches, qty)
            logger.debug(
                "Planned %s for product ID: %s, hint=%s, live=%s",
                self._strategy.value, pid, batch_hint, plan.batch_ids,
            )

            if not plan.fulfilled:
                available = sum(b.remaining_quantity for b in batches)
                logger.warning(
                    "Could not reserve full quantity. Short by %d units for product ID: %s",
                    plan.shortfall, pid,
                )
                raise InsufficientInventoryError(
                    available=available,
                    requested=qty,
                    message=(
                        f"Insufficient inventory for product ID: {pid}. "
                        f"Available: {available}, Requested: {qty}"
                    ),
                )

            by_id = {b.batch_id: b for b in batches}
            touched: list[Batch] = []
            for allocation in plan.allocations:
                batch = by_id[allocation.batch_id]
                batch.deduct(allocation.quantity_taken)
                touched.append(batch)
            self._batch_repo.save_all(touched)

        logger.info(
            "Reserved %d units for product ID: %s from batches %s",
            qty, pid, plan.batch_ids,
        )
        return ReservationReceipt(
            product_id=pid,
            product_name=batches[0].product_name,
            quantity=qty,
            allocations=plan.allocations,
        )

    # --- Internal helpers -----------------------------------------------------

    def _load(self, product_id: int) -> list[Batch]:
        # Work on copies so nothing outside the lock shares our objects.
        batches = [replace(b) for b in self._batch_repo.list_by_product(product_id)]
        if not batches:
            logger.warning("No inventory found for product ID: %s", product_id)
            raise ProductNotFoundError(product_id)
        return batches

    def _lock_for(self, product_id: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = self._locks[product_id] = threading.Lock()
            return lock
