"""Package logger.

Modules import ``logger`` from here. Nothing is printed until an application
calls :func:`configure_logging` (or configures the ``vecbridge`` logger itself).
"""
from __future__ import annotations

import logging

from vecbridge.config import settings

LOGGER_NAME = "vecbridge"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger (idempotent)."""
    resolved = level if level is not None else settings.LOG_LEVEL
    if isinstance(resolved, str):
        resolved = resolved.upper()
    logger.setLevel(resolved)

    if not any(getattr(h, "_vecbridge", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._vecbridge = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
