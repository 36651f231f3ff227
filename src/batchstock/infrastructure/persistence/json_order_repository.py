"""JSON-file-backed implementation of OrderRepository.

Orders are append-only. ``reserved_batch_ids`` is stored as delimited
text (``"9,10"``) the way the order ledger has always kept it. ID
assignment and the append run under one file lock, so concurrent
processes never hand out the same order ID.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator

from filelock import FileLock

from batchstock.domain.model.order import (
    Order,
    OrderStatus,
    format_batch_ids,
    parse_batch_ids,
)
from batchstock.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(str(file_path.with_name(file_path.name + ".lock")))
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        with self._locked():
            orders = self._load_raw()
            if order.id is None:
                order.id = self.next_id()
            orders.append(self._to_raw(order))
            self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "product_id": order.product_id,
            "product_name": order.product_name,
            "quantity": order.quantity,
            "status": order.status.value,
            "order_date": order.order_date.isoformat(),
            "reserved_batch_ids": format_batch_ids(order.reserved_batch_ids),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            quantity=raw["quantity"],
            status=OrderStatus(raw["status"]),
            order_date=date.fromisoformat(raw["order_date"]),
            reserved_batch_ids=parse_batch_ids(raw.get("reserved_batch_ids", "")),
        )

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock, self._file_lock:
            yield

    def _load_raw(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._file_path.parent,
            prefix=f"{self._file_path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with tmp:
                json.dump(orders, tmp, indent=2)
                tmp.write("\n")
            os.replace(tmp.name, self._file_path)
        except BaseException:
            Path(tmp.name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        with self._locked():
            if not self._file_path.exists():
                self._persist_raw([])
