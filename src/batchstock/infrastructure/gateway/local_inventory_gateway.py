"""In-process implementation of InventoryGateway.

Used when both services run in the same process (the CLI's default).
Calls the inventory service directly, so its domain exceptions pass
through untouched.
"""

from __future__ import annotations

from batchstock.domain.gateway.inventory_gateway import InventoryGateway
from batchstock.domain.model.batch import InventorySnapshot
from batchstock.domain.model.reservation import ReservationReceipt
from batchstock.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)


class LocalInventoryGateway(InventoryGateway):

    def __init__(self, inventory_service: InventoryReservationService) -> None:
        self._inventory_service = inventory_service

    def get_inventory(self, product_id: int) -> InventorySnapshot:
        return self._inventory_service.get_batches(product_id)

    def reserve(
        self,
        product_id: int,
        quantity: int,
        batch_hint: list[int] | None = None,
    ) -> ReservationReceipt:
        return self._inventory_service.reserve(product_id, quantity, batch_hint)
