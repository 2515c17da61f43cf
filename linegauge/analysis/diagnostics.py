"""Records produced by the line length rule.

A run yields a flat, line-ordered sequence of two record types:
- Diagnostic: a TooLong warning or a MaxExceeded error for one line
- MetricObservation: the length bucket a measured line falls into
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Union

from linegauge.constants import LINE_LENGTH_BUCKETS, LINE_LENGTH_METRIC, OVERFLOW_BUCKET


class Severity(StrEnum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode(StrEnum):
    """Sniff-style codes distinguishing the two reportable outcomes."""

    TOO_LONG = "TooLong"
    MAX_EXCEEDED = "MaxExceeded"


TOO_LONG_MESSAGE = "Line exceeds %s characters; has %s characters"
MAX_EXCEEDED_MESSAGE = "Line exceeds limit of %s characters; has %s characters"


@dataclass(frozen=True)
class Diagnostic:
    """A single rule violation anchored to a token.

    ``data`` holds ``(limit, measured_length)`` and fills the ``%s``
    placeholders of ``template``.
    """

    severity: Severity
    code: DiagnosticCode
    anchor: int
    line: int
    column: int
    template: str
    data: tuple[int, int]

    @property
    def message(self) -> str:
        return self.template % self.data

    @property
    def limit(self) -> int:
        return self.data[0]

    @property
    def length(self) -> int:
        return self.data[1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "anchor": self.anchor,
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "data": list(self.data),
        }


@dataclass(frozen=True)
class MetricObservation:
    """One line's contribution to the ``Line length`` metric."""

    anchor: int
    line: int
    value: str
    name: str = LINE_LENGTH_METRIC

    def to_dict(self) -> dict[str, Any]:
        return {
            "anchor": self.anchor,
            "line": self.line,
            "name": self.name,
            "value": self.value,
        }


AnalysisRecord = Union[Diagnostic, MetricObservation]


def bucket_for(line_length: int) -> str:
    """Return the metric bucket label for a line length (bounds inclusive)."""
    for upper, label in LINE_LENGTH_BUCKETS:
        if line_length <= upper:
            return label
    return OVERFLOW_BUCKET


def bucket_labels() -> list[str]:
    """All bucket labels, shortest lines first."""
    return [label for _, label in LINE_LENGTH_BUCKETS] + [OVERFLOW_BUCKET]


def too_long(anchor: int, line: int, column: int, limit: int, length: int) -> Diagnostic:
    return Diagnostic(
        severity=Severity.WARNING,
        code=DiagnosticCode.TOO_LONG,
        anchor=anchor,
        line=line,
        column=column,
        template=TOO_LONG_MESSAGE,
        data=(limit, length),
    )


def max_exceeded(anchor: int, line: int, column: int, limit: int, length: int) -> Diagnostic:
    return Diagnostic(
        severity=Severity.ERROR,
        code=DiagnosticCode.MAX_EXCEEDED,
        anchor=anchor,
        line=line,
        column=column,
        template=MAX_EXCEEDED_MESSAGE,
        data=(limit, length),
    )
