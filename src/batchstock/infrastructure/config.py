"""Process configuration, read once at startup.

Values come from the environment; a ``.env`` file in the working
directory is loaded first when present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from batchstock.domain.exceptions import InvalidRequestError
from batchstock.domain.service.reservation_strategy import ReservationStrategy

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    strategy: ReservationStrategy = ReservationStrategy.FIFO
    inventory_url: str | None = None
    inventory_timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "WARNING"


def load_settings() -> Settings:
    load_dotenv()

    raw_timeout = os.getenv("BATCHSTOCK_INVENTORY_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise InvalidRequestError(
            f"BATCHSTOCK_INVENTORY_TIMEOUT must be a number, got {raw_timeout!r}"
        ) from None
    if timeout <= 0:
        raise InvalidRequestError("BATCHSTOCK_INVENTORY_TIMEOUT must be positive")

    return Settings(
        data_dir=Path(os.getenv("BATCHSTOCK_DATA_DIR", str(DEFAULT_DATA_DIR))),
        strategy=ReservationStrategy.parse(
            os.getenv("BATCHSTOCK_INVENTORY_STRATEGY", ReservationStrategy.FIFO.value)
        ),
        inventory_url=os.getenv("BATCHSTOCK_INVENTORY_URL") or None,
        inventory_timeout=timeout,
        log_level=os.getenv("BATCHSTOCK_LOG_LEVEL", "WARNING").upper(),
    )
