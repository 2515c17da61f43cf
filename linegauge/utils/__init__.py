"""
linegauge utility modules.

- Logging (loguru, STDERR only)
- Serialization of report types to JSON primitives
"""

from .logger import configure_logging, is_debug_enabled, logger
from .serialization import serialize_to_primitives

__all__ = [
    "configure_logging",
    "is_debug_enabled",
    "logger",
    "serialize_to_primitives",
]
