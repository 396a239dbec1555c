"""Logging utilities for zigmarkdoc.

Diagnostics always go to stderr so that stdout carries nothing but the
generated document.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOGGER_NAME = "zigmarkdoc"
_CONSOLE_FORMAT = "[zigmarkdoc] %(levelname)s %(message)s"
# Verbose runs also name the component (extract, orchestrator, ...).
_VERBOSE_FORMAT = "[zigmarkdoc] %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the zigmarkdoc hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Attach a single console handler to the zigmarkdoc logger.

    INFO and above are shown by default, DEBUG as well with ``verbose``.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
