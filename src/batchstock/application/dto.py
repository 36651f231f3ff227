"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / endpoint layer and the application
layer without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from batchstock.domain.model.batch import InventorySnapshot
from batchstock.domain.model.order import Order
from batchstock.domain.model.reservation import ReservationReceipt

ORDER_PLACED_MESSAGE = "Order placed successfully. Inventory reserved."
INVENTORY_UPDATED_MESSAGE = "Inventory updated successfully"


@dataclass(frozen=True)
class BatchDTO:
    batch_id: int
    quantity: int
    expiry_date: str  # ISO date, e.g. "2026-05-31"


@dataclass(frozen=True)
class InventoryDTO:
    """Output: a product's batches in the order the active strategy uses."""

    product_id: int
    product_name: str
    batches: list[BatchDTO]

    @property
    def total_available(self) -> int:
        return sum(b.quantity for b in self.batches)

    @staticmethod
    def from_snapshot(snapshot: InventorySnapshot) -> InventoryDTO:
        return InventoryDTO(
            product_id=snapshot.product_id,
            product_name=snapshot.product_name,
            batches=[
                BatchDTO(
                    batch_id=b.batch_id,
                    quantity=b.remaining_quantity,
                    expiry_date=b.expiry_date.isoformat(),
                )
                for b in snapshot.batches
            ],
        )


@dataclass(frozen=True)
class AllocationDTO:
    batch_id: int
    quantity_taken: int


@dataclass(frozen=True)
class ReservationDTO:
    """Output: a committed reservation."""

    success: bool
    message: str
    updated_quantity: int
    allocations: list[AllocationDTO]

    @property
    def batch_ids(self) -> list[int]:
        return [a.batch_id for a in self.allocations]

    @staticmethod
    def from_receipt(receipt: ReservationReceipt) -> ReservationDTO:
        return ReservationDTO(
            success=True,
            message=INVENTORY_UPDATED_MESSAGE,
            updated_quantity=receipt.quantity,
            allocations=[
                AllocationDTO(a.batch_id, a.quantity_taken)
                for a in receipt.allocations
            ],
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a placed order as displayed to the user."""

    id: int
    product_id: int
    product_name: str
    quantity: int
    status: str
    order_date: str
    reserved_batch_ids: list[int]
    message: str = ORDER_PLACED_MESSAGE

    @staticmethod
    def from_order(order: Order, message: str = ORDER_PLACED_MESSAGE) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            product_id=order.product_id,
            product_name=order.product_name,
            quantity=order.quantity,
            status=order.status.value,
            order_date=order.order_date.isoformat(),
            reserved_batch_ids=list(order.reserved_batch_ids),
            message=message,
        )
