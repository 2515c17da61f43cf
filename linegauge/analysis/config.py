"""Configuration for the line length rule.

The rule is configured with an immutable value created once per run and
passed into the analyzer. Values can come from ruleset-style property
mappings (``lineLimit``, ``ignoreComments``...), which may carry string
values, or from a JSON config file.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from linegauge.constants import (
    DEFAULT_ABSOLUTE_LINE_LIMIT,
    DEFAULT_LINE_LIMIT,
    DEFAULT_TAB_WIDTH,
)
from linegauge.types.errors import ConfigurationError, ErrorContext, RecoveryAction
from linegauge.utils.logger import logger

# Ruleset property name -> field name
PROPERTY_ALIASES: dict[str, str] = {
    "lineLimit": "line_limit",
    "absoluteLineLimit": "absolute_line_limit",
    "ignoreComments": "ignore_comments",
    "ignoreUseStatementsLines": "ignore_use_statements_lines",
    "tabWidth": "tab_width",
}

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}

# Key a JSON config file may nest the rule settings under
CONFIG_SECTION = "lineLength"


@dataclass(frozen=True)
class LineLengthConfig:
    """Thresholds and exemptions for the line length rule.

    Attributes:
        line_limit: Soft limit; longer lines get a TooLong warning.
        absolute_line_limit: Hard limit; longer lines get a MaxExceeded
            error instead. 0 disables the hard check.
        ignore_comments: Never report comment lines.
        ignore_use_statements_lines: Never report import declarations.
        tab_width: Tab stop width used when tokenizing. 0 counts a tab
            as one column.
    """

    line_limit: int = DEFAULT_LINE_LIMIT
    absolute_line_limit: int = DEFAULT_ABSOLUTE_LINE_LIMIT
    ignore_comments: bool = False
    ignore_use_statements_lines: bool = True
    tab_width: int = DEFAULT_TAB_WIDTH

    def __post_init__(self) -> None:
        for name in ("line_limit", "absolute_line_limit", "tab_width"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}",
                    user_message=f"Invalid value for {name}: {value!r}",
                )
            if value < 0:
                raise ConfigurationError(
                    f"{name} must be non-negative, got {value}",
                    user_message=f"{name} cannot be negative.",
                )
        if self.line_limit < 1:
            raise ConfigurationError(
                "line_limit must be at least 1",
                user_message="line_limit must be at least 1.",
            )
        for name in ("ignore_comments", "ignore_use_statements_lines"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(
                    f"{name} must be a boolean, got {getattr(self, name)!r}",
                    user_message=f"Invalid value for {name}.",
                )

    @property
    def hard_limit_enabled(self) -> bool:
        return self.absolute_line_limit > 0

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> LineLengthConfig:
        """Build a config from ruleset properties or snake_case keys.

        String values are coerced the way ruleset properties are written
        (``"true"``, ``"120"``).

        Raises:
            ConfigurationError: On unknown keys or uncoercible values.
        """
        return cls().with_overrides(**_normalize(mapping))

    def with_overrides(self, **changes: Any) -> LineLengthConfig:
        """Return a copy with the given fields replaced. ``None`` values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown line length option(s): {', '.join(unknown)}",
                user_message=f"Unknown option(s): {', '.join(unknown)}",
                recovery_actions=[
                    RecoveryAction(
                        description="Use one of: " + ", ".join(sorted(PROPERTY_ALIASES)),
                    )
                ],
            )
        coerced = {
            name: _coerce(name, value)
            for name, value in changes.items()
            if value is not None
        }
        return replace(self, **coerced)

    def to_dict(self) -> dict[str, Any]:
        """Ruleset-style property mapping."""
        by_field = {v: k for k, v in PROPERTY_ALIASES.items()}
        return {by_field[f.name]: getattr(self, f.name) for f in fields(self)}


def load_config(path: str | Path) -> LineLengthConfig:
    """Load a LineLengthConfig from a JSON file.

    The file holds either the properties directly or nests them under a
    ``"lineLength"`` key::

        {"lineLength": {"lineLimit": 100, "absoluteLineLimit": 120}}

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or
            holds invalid options.
    """
    config_path = Path(path)
    context = ErrorContext(operation="load_config", file_path=str(config_path))

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            user_message=f"Config file not found: {config_path}",
            context=context,
            original_error=e,
        ) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Could not read config file {config_path}: {e}",
            user_message=f"Config file {config_path} is not valid JSON.",
            context=context,
            original_error=e,
        ) from e

    if isinstance(raw, dict) and CONFIG_SECTION in raw:
        raw = raw[CONFIG_SECTION]
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a JSON object",
            context=context,
        )

    config = LineLengthConfig.from_mapping(raw)
    logger.debug(f"Loaded config from {config_path}: {config}")
    return config


def _normalize(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {PROPERTY_ALIASES.get(key, key): value for key, value in mapping.items()}


def _coerce(name: str, value: Any) -> Any:
    if name in ("ignore_comments", "ignore_use_statements_lines"):
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            raise ConfigurationError(
                f"{name} expects a boolean, got {value!r}",
                user_message=f"Invalid value for {name}: {value!r}",
            )
        return value

    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ConfigurationError(
                f"{name} expects an integer, got {value!r}",
                user_message=f"Invalid value for {name}: {value!r}",
                original_error=e,
            ) from e
    return value
