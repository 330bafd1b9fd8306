"""loguru sink configuration.

stdout carries the MCP protocol, so every log record goes to stderr.
"""

from __future__ import annotations

import sys

from loguru import logger

__all__ = ["setup_logging"]

_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}"


def setup_logging(level: str = "WARNING") -> None:
    """Replace loguru's default handler with a single stderr sink."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT, backtrace=False)
