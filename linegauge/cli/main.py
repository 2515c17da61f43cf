"""Command-line interface for linegauge.

Usage:
    linegauge check src/ --line-limit 100 --absolute-line-limit 120
    linegauge check app.php --format json --metrics

Exit status: 0 when no line is reported, 1 when any warning or error was
reported (or a file could not be read), 2 on usage or configuration
errors, including path arguments that do not exist.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from linegauge import __version__
from linegauge.analysis.config import LineLengthConfig, load_config
from linegauge.analysis.report import FileReport, check_file, discover_files, validate_paths
from linegauge.constants import DEFAULT_CONFIG_FILENAME
from linegauge.types.errors import ConfigurationError, ResourceError, ValidationError
from linegauge.utils.logger import configure_logging, logger
from linegauge.utils.serialization import serialize_to_primitives

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_USAGE_ERROR = 2


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="linegauge", message="%(prog)s v%(version)s")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """linegauge - Line Length Analysis for tokenized source files.

    Reports lines longer than a soft limit (warning) or a hard limit
    (error), with exemptions for import lines and unbreakable comments.
    """
    configure_logging(debug or None)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--line-limit", type=click.IntRange(min=1), default=None,
              help="Soft limit; longer lines are warnings. [default: 80]")
@click.option("--absolute-line-limit", type=click.IntRange(min=0), default=None,
              help="Hard limit; longer lines are errors, 0 disables. [default: 80]")
@click.option("--ignore-comments/--no-ignore-comments", default=None,
              help="Never report comment lines.")
@click.option("--ignore-use-statements/--no-ignore-use-statements", default=None,
              help="Never report import (use) lines. [default: ignore]")
@click.option("--tab-width", type=click.IntRange(min=0), default=None,
              help="Tab stop width; 0 counts a tab as one column.")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help=f"JSON config file. [default: ./{DEFAULT_CONFIG_FILENAME} if present]")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              show_default=True, help="Output format.")
@click.option("--metrics", is_flag=True, help="Print the line length distribution.")
@click.pass_context
def check(
    ctx: click.Context,
    paths: tuple[Path, ...],
    line_limit: int | None,
    absolute_line_limit: int | None,
    ignore_comments: bool | None,
    ignore_use_statements: bool | None,
    tab_width: int | None,
    config_path: Path | None,
    output_format: str,
    metrics: bool,
) -> None:
    """Check line lengths in files or directories."""
    try:
        paths = tuple(validate_paths(paths))
        config = _resolve_config(config_path).with_overrides(
            line_limit=line_limit,
            absolute_line_limit=absolute_line_limit,
            ignore_comments=ignore_comments,
            ignore_use_statements_lines=ignore_use_statements,
            tab_width=tab_width,
        )
    except (ConfigurationError, ValidationError) as e:
        click.echo(e.get_formatted_message(), err=True)
        ctx.exit(EXIT_USAGE_ERROR)

    reports: list[FileReport] = []
    failures: list[ResourceError] = []

    for file_path in discover_files(paths):
        try:
            reports.append(check_file(file_path, config))
        except ResourceError as e:
            logger.warning(str(e))
            failures.append(e)

    if output_format == "json":
        _print_json(reports, failures, config)
    else:
        _print_text(reports, failures, metrics)

    has_issues = any(r.has_issues for r in reports)
    ctx.exit(EXIT_ISSUES if has_issues or failures else EXIT_OK)


def _resolve_config(config_path: Path | None) -> LineLengthConfig:
    if config_path is not None:
        return load_config(config_path)
    default = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if default.is_file():
        return load_config(default)
    return LineLengthConfig()


def _print_text(reports: list[FileReport], failures: list[ResourceError], metrics: bool) -> None:
    for report in reports:
        for diagnostic in report.diagnostics:
            click.echo(
                f"{report.path}:{diagnostic.line}:{diagnostic.column}: "
                f"{diagnostic.severity.value}: {diagnostic.message} ({diagnostic.code.value})"
            )

    for failure in failures:
        click.echo(failure.get_formatted_message(), err=True)

    errors = sum(r.error_count for r in reports)
    warnings = sum(r.warning_count for r in reports)
    click.echo(
        f"Checked {len(reports)} file(s): {errors} error(s), {warnings} warning(s)"
    )

    if metrics:
        totals: dict[str, int] = {}
        for report in reports:
            for label, count in report.metric_counts().items():
                totals[label] = totals.get(label, 0) + count
        measured = sum(totals.values())
        click.echo("Line length:")
        for label, count in totals.items():
            share = (count / measured * 100) if measured else 0.0
            click.echo(f"  {label:<12} {count:>6} [{share:5.1f}%]")


def _print_json(reports: list[FileReport], failures: list[ResourceError], config: LineLengthConfig) -> None:
    payload = {
        "config": config.to_dict(),
        "files": [r.to_dict() for r in reports],
        "failures": [f.to_dict() for f in failures],
        "totals": {
            "files": len(reports),
            "errors": sum(r.error_count for r in reports),
            "warnings": sum(r.warning_count for r in reports),
        },
    }
    click.echo(json.dumps(serialize_to_primitives(payload), indent=2))


def main() -> None:
    """Console script entry point."""
    cli(prog_name="linegauge")


if __name__ == "__main__":
    sys.exit(main())
