"""First-boot seeding of the batch ledger.

The packaged ``seed_batches.json`` dataset is loaded once, into an empty
store. After that the ledger only changes through reservations.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from batchstock.domain.model.batch import Batch
from batchstock.domain.repository.batch_repository import BatchRepository

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).with_name("seed_batches.json")


def load_seed_batches(path: Path = SEED_FILE) -> list[Batch]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return [
        Batch(
            batch_id=r["batch_id"],
            product_id=r["product_id"],
            product_name=r["product_name"],
            remaining_quantity=r["quantity"],
            expiry_date=date.fromisoformat(r["expiry_date"]),
        )
        for r in raw
    ]


def seed_batches(repo: BatchRepository, path: Path = SEED_FILE) -> int:
    """Load the seed dataset if the store is empty. Returns batches written."""
    with repo.lock():
        if not repo.is_empty():
            return 0
        batches = load_seed_batches(path)
        repo.save_all(batches)
    logger.info("Seeded %d inventory batches from %s", len(batches), path.name)
    return len(batches)
