"""Application service: Place Order use case.

Coordinates the order side of the reservation protocol:

    RECEIVED -> VALIDATED -> CHECKED -> RESERVED -> PERSISTED -> CONFIRMED

The CHECKED step is advisory. Another order can drain the product
between the read and the reserve call, so the inventory service's
reserve is the authoritative check. When it refuses after the advisory
pass succeeded, the failure is reported as a ReservationConflictError.
No order record is written on any failure path.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Callable

from batchstock.application.dto import OrderDTO
from batchstock.domain.exceptions import (
    InsufficientInventoryError,
    ReservationConflictError,
)
from batchstock.domain.gateway.inventory_gateway import InventoryGateway
from batchstock.domain.model.batch import InventorySnapshot
from batchstock.domain.model.order import Order
from batchstock.domain.model.value_objects import ProductId, Quantity
from batchstock.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class PlacementStage(Enum):
    RECEIVED = "RECEIVED"
    VALIDATED = "VALIDATED"
    CHECKED = "CHECKED"
    RESERVED = "RESERVED"
    PERSISTED = "PERSISTED"
    CONFIRMED = "CONFIRMED"


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        inventory_gateway: InventoryGateway,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._order_repo = order_repo
        self._inventory = inventory_gateway
        self._clock = clock

    def handle(self, product_id: int, quantity: int) -> OrderDTO:
        """Place an order for ``quantity`` units of a product."""
        self._stage(PlacementStage.RECEIVED, product_id, quantity)

        pid = ProductId(product_id).value
        qty = Quantity(quantity).value
        self._stage(PlacementStage.VALIDATED, pid, qty)

        snapshot = self._inventory.get_inventory(pid)
        advisory_ids = self._check_availability(snapshot, qty)
        self._stage(PlacementStage.CHECKED, pid, qty)

        try:
            receipt = self._inventory.reserve(pid, qty, batch_hint=advisory_ids)
        except ReservationConflictError:
            raise
        except InsufficientInventoryError as exc:
            logger.warning(
                "Inventory for product ID: %s changed after the advisory check: %s",
                pid, exc,
            )
            raise ReservationConflictError(
                available=exc.available, requested=exc.requested, message=str(exc)
            ) from exc
        self._stage(PlacementStage.RESERVED, pid, qty)

        if receipt.batch_ids != advisory_ids:
            logger.info(
                "Reserved batches %s differ from advisory plan %s",
                receipt.batch_ids, advisory_ids,
            )

        order = Order.place(
            product_id=pid,
            product_name=receipt.product_name or snapshot.product_name,
            quantity=qty,
            reserved_batch_ids=receipt.batch_ids,
            order_date=self._clock(),
        )
        self._order_repo.save(order)
        self._stage(PlacementStage.PERSISTED, pid, qty)

        logger.info(
            "Order placed successfully. Order ID: %s, Product ID: %s, Quantity: %s",
            order.id, pid, qty,
        )
        self._stage(PlacementStage.CONFIRMED, pid, qty)
        return OrderDTO.from_order(order)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _check_availability(snapshot: InventorySnapshot, quantity: int) -> list[int]:
        """Fail early when the snapshot cannot cover the order.

        Returns the batch IDs a walk over the snapshot would draw from.
        They are passed to the inventory service as a hint only.
        """
        available = snapshot.total_available
        if available < quantity:
            logger.error(
                "Insufficient inventory. Available: %d, Requested: %d",
                available, quantity,
            )
            raise InsufficientInventoryError(available=available, requested=quantity)

        batch_ids: list[int] = []
        needed = quantity
        for batch in snapshot.batches:
            if needed <= 0:
                break
            if batch.remaining_quantity > 0:
                batch_ids.append(batch.batch_id)
                needed -= min(batch.remaining_quantity, needed)
        return batch_ids

    @staticmethod
    def _stage(stage: PlacementStage, product_id: object, quantity: object) -> None:
        logger.debug("Order %s: product ID=%s, quantity=%s", stage.value, product_id, quantity)
