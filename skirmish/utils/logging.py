"""Logging configuration for the combat core and its API host."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# Per-timer and per-request chatter stays at WARNING unless DEBUG is asked for
_NOISY_LOGGERS = ("skirmish.engine.timers", "uvicorn.access")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger to write one line per record to stdout."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    quiet_level = numeric_level if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
