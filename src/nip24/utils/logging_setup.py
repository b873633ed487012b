"""Shared logger configuration for the ``nip24`` package."""

from __future__ import annotations

import logging
import sys
from typing import Final

_LOGGER_NAME: Final = "nip24"


def setup_logger(level: int | None = None) -> logging.Logger:
    """Return the shared nip24 logger configured for console output.

    The level is only changed when ``level`` is given, so that modules fetching
    the logger at import time do not reset what the CLI configured.
    """

    logger = logging.getLogger(_LOGGER_NAME)
    if level is not None:
        logger.setLevel(level)
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    logger.propagate = False

    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(message)s",
            "%H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
