"""Logging configuration.

One named logger for the whole package, printed to stdout. Run milestones are
logged as `SCRAPER_<EVENT> {json}` lines so they can be grepped and parsed.
"""

import json
import logging
import sys
from typing import Any

LOGGER_NAME = "careers-engine"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the package logger (once) and set its level."""
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    # Avoid duplicate handlers (e.g., uvicorn reload)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        logger.addHandler(handler)


def log_event(event: str, **payload: Any) -> None:
    """Log a structured run event, e.g. ``log_event("PAGE", page=2, items_found=10)``."""
    logger.info(
        "SCRAPER_%s %s", event, json.dumps(payload, default=str, sort_keys=True)
    )
