"""Project-wide logging utilities.

A single `tailwatch` logger is configured lazily. It stays at WARNING so the
tailed output is not interleaved with diagnostics; `--verbose` lowers it to
DEBUG, which also shows the read errors the engine recovers from.
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        logger = logging.getLogger("tailwatch")
        # Only add a handler if the application hasn't configured logging.
        if not logger.handlers:
            handler = RichHandler(console=Console(stderr=True), show_path=False)
            handler.setFormatter(logging.Formatter("%(message)s"))
            logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        _LOGGER = logger
    return _LOGGER


def configure_logging(verbose: bool = False) -> logging.Logger:
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


__all__ = ["get_logger", "configure_logging"]
