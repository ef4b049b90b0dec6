"""Mini README: Application-wide logging helpers for the trip ledger.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - installs the single stream handler.

Usage:
    Every module creates ``LOGGER = get_logger(__name__)`` at import time.
    The root handler is installed once so reloading modules under the
    development server does not duplicate log lines.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[int] = None) -> None:
    """Attach a timestamped stream handler once; an explicit ``level`` always applies."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(logging.INFO if level is None else level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def level_for_environment(environment: str) -> int:
    """Map the configured environment label onto a logging level."""

    return logging.DEBUG if environment.strip().lower() == "development" else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger, making sure the root handler exists."""

    configure_root_logger()
    return logging.getLogger(name)
