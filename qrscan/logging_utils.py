"""Mini README: Application-wide logging helpers for the QR scan core.

Structure:
    * get_logger - factory returning a module logger after baseline setup.
    * configure_root_logger - install the shared handler and pick a level.

Usage:
    Modules keep a module level ``LOGGER = get_logger(__name__)``. Capture
    state transitions and history fetch bookkeeping log at DEBUG, so running
    with ``QRSCAN_LOG_LEVEL=DEBUG`` traces a whole scan without touching the
    presentation layer.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False
_PACKAGE_LOGGER = "qrscan"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach the shared handler once; later calls only adjust the level."""

    global _LOGGER_INITIALISED
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(_coerce_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.getLogger().addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
