"""Abstract repository for the Batch aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext

from batchstock.domain.model.batch import Batch


class BatchRepository(ABC):

    @abstractmethod
    def list_by_product(self, product_id: int) -> list[Batch]:
        """Return every batch of a product in insertion order, zero-quantity included."""

    @abstractmethod
    def list_all(self) -> list[Batch]:
        """Return every batch in the store."""

    @abstractmethod
    def save_all(self, batches: list[Batch]) -> None:
        """Persist new or updated batches as a single unit of work.

        Either every batch is written or none is.
        """

    def lock(self) -> AbstractContextManager:
        """Exclusive access to the store for a read-plan-write sequence.

        Stores shared between processes must override this. The lock is
        re-entrant for the holder, so ``save_all`` may take it again.
        """
        return nullcontext()

    def is_empty(self) -> bool:
        return not self.list_all()
