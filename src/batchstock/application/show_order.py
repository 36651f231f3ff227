"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from batchstock.application.dto import OrderDTO
from batchstock.domain.exceptions import EntityNotFoundError
from batchstock.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(order, message="")


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[OrderDTO]:
        return [OrderDTO.from_order(o, message="") for o in self._order_repo.list_all()]
