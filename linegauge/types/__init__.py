"""
linegauge type definitions.

This module exports the error types shared across the package.
"""

from .errors import (
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    LineGaugeError,
    RecoveryAction,
    ResourceError,
    TokenStreamError,
    ValidationError,
)

__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "LineGaugeError",
    "ConfigurationError",
    "ValidationError",
    "ResourceError",
    "TokenStreamError",
]
