"""Line length analysis.

Components:
- LineLengthConfig: immutable rule configuration (+ JSON loader)
- LineLengthAnalyzer: the rule itself, over a TokenStream
- Diagnostic / MetricObservation: records the rule produces
- FileReport, check_source, check_file, discover_files, validate_paths:
  file-level glue

Usage:
    from linegauge.analysis import LineLengthConfig, check_source

    report = check_source(source, LineLengthConfig(line_limit=100))
    for diagnostic in report.diagnostics:
        print(f"{diagnostic.line}: {diagnostic.message}")
"""

from .config import PROPERTY_ALIASES, LineLengthConfig, load_config
from .diagnostics import (
    AnalysisRecord,
    Diagnostic,
    DiagnosticCode,
    MetricObservation,
    Severity,
    bucket_for,
    bucket_labels,
)
from .line_length import LineLengthAnalyzer, analyze, find_line_starts
from .report import FileReport, check_file, check_source, discover_files, validate_paths

__all__ = [
    "PROPERTY_ALIASES",
    "LineLengthConfig",
    "load_config",
    "AnalysisRecord",
    "Diagnostic",
    "DiagnosticCode",
    "MetricObservation",
    "Severity",
    "bucket_for",
    "bucket_labels",
    "LineLengthAnalyzer",
    "analyze",
    "find_line_starts",
    "FileReport",
    "check_file",
    "check_source",
    "discover_files",
    "validate_paths",
]
