"""Logging setup: one RichHandler on the ``quizmaker`` logger."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

_PACKAGE_LOGGER = "quizmaker"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a RichHandler to the package logger (idempotent across reruns)."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
