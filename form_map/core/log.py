"""Logging helpers for the ``form_map`` logger namespace."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger("form_map").addHandler(logging.NullHandler())


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the package logger.

    Safe to call repeatedly: the handler is only installed once.

    Args:
        level: Logging level for the package logger and its handler.

    Returns:
        The configured ``form_map`` logger.
    """
    logger = logging.getLogger("form_map")
    logger.setLevel(level)

    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(handler)

    return logger
