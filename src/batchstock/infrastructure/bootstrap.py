"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. Settings are read once
per process and the reservation strategy is handed to the inventory
service here, never looked up ad hoc.
"""

from __future__ import annotations

from functools import lru_cache

from batchstock.application.endpoints import InventoryEndpoints, OrderEndpoints
from batchstock.application.place_order import PlaceOrderHandler
from batchstock.application.reserve_inventory import ReserveInventoryHandler
from batchstock.application.show_inventory import ShowInventoryHandler
from batchstock.domain.gateway.inventory_gateway import InventoryGateway
from batchstock.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from batchstock.infrastructure.config import Settings, load_settings
from batchstock.infrastructure.gateway.http_inventory_gateway import (
    HttpInventoryGateway,
)
from batchstock.infrastructure.gateway.local_inventory_gateway import (
    LocalInventoryGateway,
)
from batchstock.infrastructure.persistence.json_batch_repository import (
    JsonBatchRepository,
)
from batchstock.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from batchstock.infrastructure.persistence.seed import seed_batches


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def batch_repository() -> JsonBatchRepository:
    repo = JsonBatchRepository(settings().data_dir / "batches.json")
    seed_batches(repo)
    return repo


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


@lru_cache(maxsize=1)
def inventory_service() -> InventoryReservationService:
    return InventoryReservationService(batch_repository(), strategy=settings().strategy)


def inventory_gateway() -> InventoryGateway:
    cfg = settings()
    if cfg.inventory_url:
        return HttpInventoryGateway(cfg.inventory_url, timeout=cfg.inventory_timeout)
    return LocalInventoryGateway(inventory_service())


def inventory_endpoints() -> InventoryEndpoints:
    svc = inventory_service()
    return InventoryEndpoints(ShowInventoryHandler(svc), ReserveInventoryHandler(svc))


def order_endpoints() -> OrderEndpoints:
    return OrderEndpoints(PlaceOrderHandler(order_repository(), inventory_gateway()))
