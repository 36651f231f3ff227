"""JSON-file-backed implementation of BatchRepository.

The file may be shared by several processes. ``lock()`` combines an
in-process ``RLock`` with a ``filelock.FileLock`` on a sibling
``.lock`` file; every write happens under it and lands through a
uniquely named temp file and ``os.replace``.
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

from batchstock.domain.model.batch import Batch
from batchstock.domain.repository.batch_repository import BatchRepository


class JsonBatchRepository(BatchRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_lock = FileLock(str(file_path.with_name(file_path.name + ".lock")))
        self._ensure_file()

    # --- BatchRepository interface --------------------------------------------

    def list_by_product(self, product_id: int) -> list[Batch]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["product_id"] == product_id
        ]

    def list_all(self) -> list[Batch]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save_all(self, batches: list[Batch]) -> None:
        with self.lock():
            records = self._load_raw()
            index = {raw["batch_id"]: i for i, raw in enumerate(records)}
            for batch in batches:
                i = index.get(batch.batch_id)
                if i is None:
                    index[batch.batch_id] = len(records)
                    records.append(self._to_raw(batch))
                else:
                    records[i] = self._to_raw(batch)
            self._persist_raw(records)

    @contextmanager
    def lock(self) -> Iterator[None]:
        with self._lock, self._file_lock:
            yield

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(batch: Batch) -> dict:
        return {
            "batch_id": batch.batch_id,
            "product_id": batch.product_id,
            "product_name": batch.product_name,
            "quantity": batch.remaining_quantity,
            "expiry_date": batch.expiry_date.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Batch:
        return Batch(
            batch_id=raw["batch_id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            remaining_quantity=raw["quantity"],
            expiry_date=date.fromisoformat(raw["expiry_date"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
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
                json.dump(records, tmp, indent=2)
                tmp.write("\n")
            os.replace(tmp.name, self._file_path)
        except BaseException:
            Path(tmp.name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        with self.lock():
            if not self._file_path.exists():
                self._persist_raw([])
