"""Tests for the inventory and order query use cases."""

from datetime import date

import pytest

from batchstock.application.reserve_inventory import ReserveInventoryHandler
from batchstock.application.show_inventory import ShowInventoryHandler
from batchstock.application.show_order import ListOrdersHandler, ShowOrderHandler
from batchstock.domain.exceptions import EntityNotFoundError
from batchstock.domain.model.order import Order
from batchstock.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from tests.fakes import FakeBatchRepository, FakeOrderRepository, make_batch


def _service():
    return InventoryReservationService(FakeBatchRepository([
        make_batch(10, 83, "2026-11-15"),
        make_batch(9, 29, "2026-05-31"),
    ]))


class TestShowInventory:

    def test_maps_snapshot_to_dto(self):
        dto = ShowInventoryHandler(_service()).handle(1002)

        assert dto.product_name == "Smartphone"
        assert [(b.batch_id, b.quantity, b.expiry_date) for b in dto.batches] == [
            (9, 29, "2026-05-31"),
            (10, 83, "2026-11-15"),
        ]
        assert dto.total_available == 112


class TestReserveInventory:

    def test_returns_allocations(self):
        dto = ReserveInventoryHandler(_service()).handle(1002, 30)

        assert dto.success
        assert dto.updated_quantity == 30
        assert dto.batch_ids == [9, 10]
        assert [a.quantity_taken for a in dto.allocations] == [29, 1]


class TestOrderQueries:

    def _repo_with_order(self):
        repo = FakeOrderRepository()
        repo.save(Order.place(1002, "Smartphone", 3, [9], date(2026, 4, 2)))
        return repo

    def test_show_order(self):
        dto = ShowOrderHandler(self._repo_with_order()).handle(1)
        assert dto.product_name == "Smartphone"
        assert dto.reserved_batch_ids == [9]
        assert dto.status == "PLACED"

    def test_show_missing_order(self):
        with pytest.raises(EntityNotFoundError, match="Order #42 not found"):
            ShowOrderHandler(FakeOrderRepository()).handle(42)

    def test_list_orders(self):
        repo = self._repo_with_order()
        repo.save(Order.place(1001, "Laptop", 1, [1], date(2026, 4, 3)))

        dtos = ListOrdersHandler(repo).handle()

        assert [d.id for d in dtos] == [1, 2]
        assert [d.product_name for d in dtos] == ["Smartphone", "Laptop"]
