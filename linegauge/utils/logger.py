"""
Logging utility for linegauge.

Diagnostics are the program's output and go to stdout; logs always go to
STDERR so they never interleave with a report that is being piped or
parsed as JSON.

Debug logging is enabled with ``--debug`` on the command line or with the
``LINEGAUGE_DEBUG=true`` environment variable.
"""

import os
import sys

from loguru import logger as loguru_logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("LINEGAUGE_DEBUG", "").lower() == "true"


def configure_logging(debug: bool | None = None) -> None:
    """
    Route log output to STDERR at the appropriate level.

    Args:
        debug: Force debug logging on or off. ``None`` falls back to
            the ``LINEGAUGE_DEBUG`` environment variable.
    """
    if debug is None:
        debug = is_debug_enabled()

    loguru_logger.remove()
    loguru_logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format=LOG_FORMAT,
        colorize=None,
    )


# Export loguru logger for direct use
logger = loguru_logger
