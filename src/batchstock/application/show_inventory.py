"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from batchstock.application.dto import InventoryDTO
from batchstock.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)


class ShowInventoryHandler:

    def __init__(self, inventory_service: InventoryReservationService) -> None:
        self._inventory_service = inventory_service

    def handle(self, product_id: int) -> InventoryDTO:
        snapshot = self._inventory_service.get_batches(product_id)
        return InventoryDTO.from_snapshot(snapshot)
