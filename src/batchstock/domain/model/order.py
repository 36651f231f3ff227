"""Order aggregate: the record of a committed reservation.

An Order only exists once the inventory service has committed the
reservation it refers to. There are no further state transitions in
this system, so the aggregate offers no mutators; the repository
assigns ``id`` on first save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from batchstock.domain.exceptions import InvalidRequestError
from batchstock.domain.model.value_objects import ProductId, Quantity

BATCH_ID_DELIMITER = ","


class OrderStatus(Enum):
    PLACED = "PLACED"


def format_batch_ids(batch_ids: list[int]) -> str:
    """Serialize batch IDs as delimited text, e.g. ``"9,10"``."""
    return BATCH_ID_DELIMITER.join(str(b) for b in batch_ids)


def parse_batch_ids(raw: str) -> list[int]:
    if not raw:
        return []
    try:
        return [int(part) for part in raw.split(BATCH_ID_DELIMITER)]
    except ValueError as exc:
        raise InvalidRequestError(f"Invalid batch ID list: {raw!r}") from exc


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders; it enforces the invariants.
    The ``__init__`` stays simple so the repository can reconstitute
    persisted orders without re-validating.
    """

    id: int | None
    product_id: int
    product_name: str
    quantity: int
    order_date: date
    reserved_batch_ids: list[int] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PLACED

    @staticmethod
    def place(
        product_id: int,
        product_name: str,
        quantity: int,
        reserved_batch_ids: list[int],
        order_date: date,
    ) -> Order:
        """Create a new PLACED order for an already-committed reservation."""
        ProductId(product_id)
        Quantity(quantity)
        if not reserved_batch_ids:
            raise InvalidRequestError(
                "An order must reference at least one reserved batch"
            )
        return Order(
            id=None,
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            order_date=order_date,
            reserved_batch_ids=list(reserved_batch_ids),
        )

    @property
    def reserved_batch_ids_text(self) -> str:
        return format_batch_ids(self.reserved_batch_ids)
