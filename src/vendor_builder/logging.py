"""
Logging utilities for the vendor builder.

All modules log through children of the ``vendor_builder`` logger so a
single call to :func:`setup_logging` controls the whole build.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_root_logger = logging.getLogger("vendor_builder")

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _to_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the vendor builder.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from vendor_builder.logging import setup_logging

        setup_logging("DEBUG")
        setup_logging("INFO", file="vendor-build.log")
    """
    level = _to_level(level)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    _root_logger.addHandler(stream_handler)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "builder", "themes")

    Returns:
        Logger instance
    """
    if name.startswith("vendor_builder."):
        return logging.getLogger(name)
    return logging.getLogger(f"vendor_builder.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for the vendor builder."""
    _root_logger.setLevel(_to_level(level))

