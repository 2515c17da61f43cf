"""Shared constants for linegauge.

Centralizes rule defaults, metric bucket labels, default source file
patterns and ignore directories.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


# Rule defaults (ruleset property defaults)
DEFAULT_LINE_LIMIT: int = 80
DEFAULT_ABSOLUTE_LINE_LIMIT: int = 80
DEFAULT_TAB_WIDTH: int = 0

# Metric recorded for every measured line
LINE_LENGTH_METRIC: str = "Line length"

# Inclusive upper bound -> bucket label, checked in order.
# Anything above the last bound falls into OVERFLOW_BUCKET.
LINE_LENGTH_BUCKETS: list[tuple[int, str]] = [
    (80, "80 or less"),
    (120, "81-120"),
    (150, "121-150"),
]
OVERFLOW_BUCKET: str = "151 or more"

# Characters stripped from the front of a comment to find its text indent
COMMENT_MARKER_CHARS: str = "/#\t "

# Prefixes that turn a line comment into a control annotation
ANNOTATION_PREFIXES: tuple[str, ...] = ("phpcs:", "linegauge:")

# Default source file glob patterns used when a directory is checked
DEFAULT_SOURCE_PATTERNS: list[str] = [
    "**/*.php",
    "**/*.inc",
    "**/*.phtml",
]

# Maximum file size to analyze (1 MB).
MAX_FILE_SIZE: int = 1_000_000

# Directories to skip during file traversal.
DEFAULT_IGNORE_DIRS: set[str] = {
    "node_modules",
    "vendor",
    ".git",
    "__pycache__",
    ".venv",
    "venv",
    "dist",
    "build",
    ".svn",
    ".idea",
}

# Default config file looked up in the working directory
DEFAULT_CONFIG_FILENAME: str = ".linegauge.json"
