"""Line length rule.

Measures every physical line of a token stream and reports lines longer
than the configured limits:

- longer than ``absolute_line_limit`` (when non-zero): MaxExceeded error
- otherwise longer than ``line_limit``: TooLong warning

A line is measured by the end column of its last token, so the width is
whatever the lexer rendered (tab expansion included), not a raw character
count. Lines are found from the token stream: a token at column 1 starts a
new line, which means the token just before it ends the previous one.

Exemptions, in evaluation order:
1. Blank lines (nothing recorded at all).
2. Annotation comments standing on a line of their own.
3. Import lines: a ``use`` keyword and a namespace separator both on the
   measured line, when ``ignore_use_statements_lines`` is set.
4. Comment lines when ``ignore_comments`` is set, or when the comment's
   last word (typically a URL) would overflow ``line_limit`` even after
   wrapping the comment at its current indent.

Exemptions 1-3 skip the metric as well; exemption 4 still records it.
"""

from __future__ import annotations

from collections.abc import Iterator

from linegauge.constants import COMMENT_MARKER_CHARS
from linegauge.tokens.stream import TokenStream
from linegauge.tokens.types import (
    ANNOTATION_KINDS,
    COMMENT_STRING_KINDS,
    WHITESPACE_KINDS,
    Token,
    TokenKind,
)
from linegauge.utils.logger import logger

from .config import LineLengthConfig
from .diagnostics import (
    AnalysisRecord,
    MetricObservation,
    bucket_for,
    max_exceeded,
    too_long,
)


def find_line_starts(stream: TokenStream) -> Iterator[int]:
    """Yield the pointer for every line to check.

    Each pointer is the index of a column-1 token, i.e. one past the last
    token of the line being measured. A final pointer equal to
    ``len(stream)`` covers the last line of the file. Token 0 never
    starts a line of its own since nothing precedes it.
    """
    size = len(stream)
    if size == 0:
        return

    for index in range(1, size):
        if stream.column_of(index) == 1:
            yield index

    yield size


class LineLengthAnalyzer:
    """Applies the line length rule to one token stream at a time.

    The analyzer holds only its configuration; every line is evaluated
    independently, so one instance can check any number of files.

    Usage:
        analyzer = LineLengthAnalyzer(LineLengthConfig(line_limit=100))
        for record in analyzer.analyze(stream):
            print(record)
    """

    def __init__(self, config: LineLengthConfig | None = None):
        self.config = config or LineLengthConfig()

    def analyze(self, stream: TokenStream) -> Iterator[AnalysisRecord]:
        """Yield diagnostics and metric observations in line order."""
        for pointer in find_line_starts(stream):
            yield from self.check_line(stream, pointer)

    def check_line(self, stream: TokenStream, pointer: int) -> Iterator[AnalysisRecord]:
        """Evaluate the line whose last token sits just before ``pointer``.

        Yields at most one metric observation followed by at most one
        diagnostic.
        """
        config = self.config

        pointer -= 1
        last = stream[pointer]

        if last.column == 1 and last.length == 0:
            # Blank line.
            return

        if last.column != 1 and last.content == stream.eol_char:
            # Anchor on the content before a bare line terminator. The
            # terminator itself still provides the measurement.
            pointer -= 1

        line_length = last.end_column
        start_of_line = max(0, pointer - line_length)

        if last.kind in ANNOTATION_KINDS:
            prev_content = stream.find_previous(
                WHITESPACE_KINDS, pointer - 1, start_of_line, exclude=True
            )
            if prev_content is None or stream.line_of(prev_content) != last.line:
                # Annotation comment on a line by itself.
                return

        if config.ignore_use_statements_lines:
            prev_use = stream.find_previous((TokenKind.USE,), pointer - 1, start_of_line)
            prev_separator = stream.find_previous(
                (TokenKind.NS_SEPARATOR,), pointer - 1, start_of_line
            )
            if (
                prev_use is not None
                and prev_separator is not None
                and stream.line_of(prev_use) == last.line
                and stream.line_of(prev_separator) == last.line
            ):
                return

        anchor = stream[pointer]
        yield MetricObservation(anchor=pointer, line=anchor.line, value=bucket_for(line_length))

        if last.kind in COMMENT_STRING_KINDS:
            if config.ignore_comments:
                return
            if line_length > config.line_limit and _is_unbreakable_comment(last, config.line_limit):
                return

        if config.hard_limit_enabled and line_length > config.absolute_line_limit:
            yield max_exceeded(
                pointer, anchor.line, anchor.column, config.absolute_line_limit, line_length
            )
        elif line_length > config.line_limit:
            yield too_long(pointer, anchor.line, anchor.column, config.line_limit, line_length)


def _is_unbreakable_comment(token: Token, line_limit: int) -> bool:
    """Check whether wrapping the comment could never bring it under the limit.

    The comment's last word (everything after its last space) is placed on
    a line of its own at the comment's text indent. If that alone is still
    longer than ``line_limit``, the comment is exempt.
    """
    content = token.content
    marker_width = len(content) - len(content.lstrip(COMMENT_MARKER_CHARS))
    indent = token.column - 1 + marker_width

    non_breaking_length = token.length
    space = content.rfind(" ")
    if space != -1:
        non_breaking_length -= space + 1

    return non_breaking_length + indent > line_limit


def analyze(stream: TokenStream, config: LineLengthConfig | None = None) -> list[AnalysisRecord]:
    """Run the line length rule over ``stream`` and return all records."""
    records = list(LineLengthAnalyzer(config).analyze(stream))
    logger.debug(f"Line length rule produced {len(records)} records for {len(stream)} tokens")
    return records
