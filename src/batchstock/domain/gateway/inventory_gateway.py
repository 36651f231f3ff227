"""Port through which the order side talks to the inventory service.

The order orchestrator never reads or writes batches itself. Adapters
either call the inventory service in-process or over HTTP; both raise
the same domain exceptions, plus UpstreamUnavailableError when the
service cannot be reached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from batchstock.domain.model.batch import InventorySnapshot
from batchstock.domain.model.reservation import ReservationReceipt


class InventoryGateway(ABC):

    @abstractmethod
    def get_inventory(self, product_id: int) -> InventorySnapshot:
        """Read the product's batches. Raises ProductNotFoundError."""

    @abstractmethod
    def reserve(
        self,
        product_id: int,
        quantity: int,
        batch_hint: list[int] | None = None,
    ) -> ReservationReceipt:
        """Commit a reservation. Raises InsufficientInventoryError on shortage."""
