"""Logging setup shared by every entry point."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)
