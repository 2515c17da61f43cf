"""Per-file reports and file discovery.

Ties the lexer and the line length rule together for real files:

    config = LineLengthConfig(line_limit=100)
    for path in discover_files(["src/"]):
        report = check_file(path, config)
        for diagnostic in report.diagnostics:
            print(report.path, diagnostic.line, diagnostic.message)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from linegauge.constants import DEFAULT_IGNORE_DIRS, DEFAULT_SOURCE_PATTERNS, MAX_FILE_SIZE
from linegauge.tokens.lexer import tokenize
from linegauge.types.errors import ErrorContext, RecoveryAction, ResourceError, ValidationError
from linegauge.utils.logger import logger

from .config import LineLengthConfig
from .diagnostics import (
    AnalysisRecord,
    Diagnostic,
    MetricObservation,
    Severity,
    bucket_labels,
)
from .line_length import LineLengthAnalyzer


@dataclass
class FileReport:
    """Diagnostics and metrics collected for one file."""

    path: str
    records: list[AnalysisRecord] = field(default_factory=list)

    def add(self, record: AnalysisRecord) -> None:
        self.records.append(record)

    def extend(self, records: Iterable[AnalysisRecord]) -> None:
        self.records.extend(records)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [r for r in self.records if isinstance(r, Diagnostic)]

    @property
    def metrics(self) -> list[MetricObservation]:
        return [r for r in self.records if isinstance(r, MetricObservation)]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def has_issues(self) -> bool:
        return any(isinstance(r, Diagnostic) for r in self.records)

    def metric_counts(self) -> dict[str, int]:
        """Number of lines per length bucket, in bucket order."""
        counts = Counter(m.value for m in self.metrics)
        return {label: counts.get(label, 0) for label in bucket_labels()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "errors": self.error_count,
            "warnings": self.warning_count,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "metrics": self.metric_counts(),
        }


def check_source(
    source: str,
    config: LineLengthConfig | None = None,
    path: str = "<string>",
) -> FileReport:
    """Tokenize ``source`` and apply the line length rule."""
    config = config or LineLengthConfig()
    stream = tokenize(source, tab_width=config.tab_width)
    report = FileReport(path=path)
    report.extend(LineLengthAnalyzer(config).analyze(stream))
    logger.debug(
        f"{path}: {report.error_count} error(s), {report.warning_count} warning(s) "
        f"over {len(report.metrics)} measured lines"
    )
    return report


def check_file(path: str | Path, config: LineLengthConfig | None = None) -> FileReport:
    """Read a file and apply the line length rule.

    Raises:
        ResourceError: If the file cannot be read or decoded as UTF-8.
    """
    file_path = Path(path)
    try:
        # newline="" keeps \r\n intact for terminator detection
        with file_path.open(encoding="utf-8", newline="") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(
            f"Failed to read {file_path}: {e}",
            user_message=f"Could not read {file_path}",
            context=ErrorContext(operation="check_file", file_path=str(file_path)),
            recovery_actions=[RecoveryAction(description="Check the file exists and is UTF-8 encoded")],
            original_error=e,
        ) from e
    return check_source(source, config, path=str(file_path))


def validate_paths(paths: Iterable[str | Path]) -> list[Path]:
    """Return ``paths`` as Path objects, requiring each one to exist.

    Raises:
        ValidationError: If any path does not exist.
    """
    checked = [Path(p) for p in paths]
    missing = [str(p) for p in checked if not p.exists()]
    if missing:
        raise ValidationError(
            f"Path(s) not found: {', '.join(missing)}",
            user_message=f"No such file or directory: {', '.join(missing)}",
            context=ErrorContext(operation="validate_paths", additional_info={"missing": missing}),
            recovery_actions=[RecoveryAction(description="Check the spelling of the path arguments")],
        )
    return checked


def discover_files(
    paths: Iterable[str | Path],
    patterns: Iterable[str] | None = None,
) -> Iterator[Path]:
    """Expand ``paths`` into source files to check.

    Files are yielded as given. Directories are searched with
    ``patterns`` (default DEFAULT_SOURCE_PATTERNS), skipping ignored
    directories and files over MAX_FILE_SIZE. Each file is yielded once.
    """
    patterns = list(patterns or DEFAULT_SOURCE_PATTERNS)
    seen: set[Path] = set()

    for raw in paths:
        base = Path(raw)
        if base.is_file():
            candidates: Iterable[Path] = [base]
        elif base.is_dir():
            candidates = sorted(
                p for pattern in patterns for p in base.glob(pattern) if p.is_file()
            )
        else:
            logger.warning(f"Path does not exist: {base}")
            continue

        for file_path in candidates:
            resolved = file_path.resolve()
            if resolved in seen:
                continue
            if base.is_dir() and _should_skip_path(file_path.relative_to(base)):
                continue
            try:
                if file_path.stat().st_size > MAX_FILE_SIZE:
                    logger.debug(f"Skipping oversized file: {file_path}")
                    continue
            except OSError as e:
                logger.debug(f"Skipping file {file_path}: {e}")
                continue
            seen.add(resolved)
            yield file_path


def _should_skip_path(relative: Path) -> bool:
    return any(part in DEFAULT_IGNORE_DIRS for part in relative.parts[:-1])
