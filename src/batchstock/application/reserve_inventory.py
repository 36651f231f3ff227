"""Application service: Reserve Inventory use case.

The inventory side of the reservation protocol. The domain service
re-plans against live batches, so any batch IDs the caller sends are a
hint only.
"""

from __future__ import annotations

from batchstock.application.dto import ReservationDTO
from batchstock.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)


class ReserveInventoryHandler:

    def __init__(self, inventory_service: InventoryReservationService) -> None:
        self._inventory_service = inventory_service

    def handle(
        self,
        product_id: int,
        quantity: int,
        batch_hint: list[int] | None = None,
    ) -> ReservationDTO:
        receipt = self._inventory_service.reserve(product_id, quantity, batch_hint)
        return ReservationDTO.from_receipt(receipt)
