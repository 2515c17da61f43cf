"""
Phase 3 Tests: Line Length Rule

These tests drive LineLengthAnalyzer with hand-built token streams:
- Soft/hard threshold evaluation and their precedence
- Line discovery from column-1 tokens, including the final line
- Blank line, annotation comment and use statement exemptions
- Comment break-ability exemption
- Metric bucketing
"""

import pytest

from linegauge.analysis import (
    Diagnostic,
    DiagnosticCode,
    LineLengthAnalyzer,
    LineLengthConfig,
    MetricObservation,
    Severity,
    analyze,
    bucket_for,
    find_line_starts,
)
from linegauge.tokens import TokenKind, TokenStream
from linegauge.types import TokenStreamError

WS = TokenKind.WHITESPACE


def diagnostics(records):
    return [r for r in records if isinstance(r, Diagnostic)]


def metrics(records):
    return [r for r in records if isinstance(r, MetricObservation)]


@pytest.fixture
def config():
    return LineLengthConfig(line_limit=80, absolute_line_limit=100)


class TestThresholds:
    """Tests for soft and hard limit evaluation."""

    def test_short_line_has_no_diagnostic(self, make_stream, code, config):
        records = analyze(make_stream([code(80)]), config)
        assert diagnostics(records) == []

    def test_warning_between_limits(self, make_stream, code, config):
        records = analyze(make_stream([code(95)]), config)
        [diag] = diagnostics(records)
        assert diag.severity == Severity.WARNING
        assert diag.code == DiagnosticCode.TOO_LONG
        assert diag.data == (80, 95)
        assert diag.message == "Line exceeds 80 characters; has 95 characters"

    def test_error_above_hard_limit(self, make_stream, code, config):
        records = analyze(make_stream([code(105)]), config)
        [diag] = diagnostics(records)
        assert diag.severity == Severity.ERROR
        assert diag.code == DiagnosticCode.MAX_EXCEEDED
        assert diag.data == (100, 105)
        assert diag.message == "Line exceeds limit of 100 characters; has 105 characters"

    def test_line_at_hard_limit_is_only_a_warning(self, make_stream, code, config):
        [diag] = diagnostics(analyze(make_stream([code(100)]), config))
        assert diag.code == DiagnosticCode.TOO_LONG

    def test_hard_limit_zero_disables_errors(self, make_stream, code):
        config = LineLengthConfig(line_limit=80, absolute_line_limit=0)
        [diag] = diagnostics(analyze(make_stream([code(500)]), config))
        assert diag.severity == Severity.WARNING
        assert diag.data == (80, 500)

    def test_default_limits_report_errors_above_80(self, make_stream, code):
        [diag] = diagnostics(analyze(make_stream([code(81)])))
        assert diag.severity == Severity.ERROR
        assert diag.data == (80, 81)

    def test_one_diagnostic_per_line(self, make_stream, code, config):
        stream = make_stream([code(95), code(10), code(105), code(81)])
        diags = diagnostics(analyze(stream, config))
        assert [d.line for d in diags] == [1, 3, 4]
        assert [d.code for d in diags] == [
            DiagnosticCode.TOO_LONG,
            DiagnosticCode.MAX_EXCEEDED,
            DiagnosticCode.TOO_LONG,
        ]

    def test_indentation_counts_towards_length(self, make_stream, code, config):
        [diag] = diagnostics(analyze(make_stream([code(90, indent=8)]), config))
        assert diag.length == 90


class TestLineDiscovery:
    """Tests for finding line boundaries in the token stream."""

    def test_line_starts_include_final_pointer(self, make_stream, code):
        stream = make_stream([code(5), code(6), code(7)])
        # Each code line is two tokens: identifier + newline
        assert list(find_line_starts(stream)) == [2, 4, 6]

    def test_empty_stream_has_no_lines(self):
        assert list(find_line_starts(TokenStream([]))) == []
        assert analyze(TokenStream([])) == []

    def test_last_line_without_newline_is_checked(self, make_stream, config):
        stream = make_stream([[(TokenKind.IDENTIFIER, "a" * 95)]])
        [diag] = diagnostics(analyze(stream, config))
        assert diag.data == (80, 95)

    def test_diagnostic_anchors_on_last_content_token(self, make_stream, code, config):
        stream = make_stream([code(10), code(95)])
        [diag] = diagnostics(analyze(stream, config))
        # Tokens: 0 ident, 1 newline, 2 ident, 3 newline
        assert diag.anchor == 2
        assert diag.line == 2
        assert diag.column == 1

    def test_trailing_whitespace_is_measured(self, make_stream, config):
        stream = make_stream([[(TokenKind.IDENTIFIER, "a" * 79), (WS, "   \n")]])
        [diag] = diagnostics(analyze(stream, config))
        assert diag.length == 82
        # Whitespace that is not a bare terminator anchors the diagnostic itself
        assert diag.anchor == 1

    def test_records_are_in_line_order(self, make_stream, code, config):
        stream = make_stream([code(95), code(120), code(3)])
        records = analyze(stream, config)
        assert [r.line for r in records] == sorted(r.line for r in records)

    def test_crlf_terminator(self, make_stream, config):
        stream = make_stream(
            [
                [(TokenKind.IDENTIFIER, "a" * 95), (WS, "\r\n")],
                [(TokenKind.IDENTIFIER, "b"), (WS, "\r\n")],
            ],
            eol="\r\n",
        )
        [diag] = diagnostics(analyze(stream, config))
        assert diag.data == (80, 95)
        assert diag.anchor == 0


class TestBlankLines:
    """Tests for the blank line exemption."""

    def test_blank_line_records_nothing(self, make_stream, blank, config):
        records = analyze(make_stream([blank(), blank()]), config)
        assert records == []

    def test_blank_lines_between_code(self, make_stream, code, blank, config):
        records = analyze(make_stream([code(10), blank(), code(20)]), config)
        assert [m.line for m in metrics(records)] == [1, 3]

    def test_whitespace_only_line_is_measured(self, make_stream, config):
        records = analyze(make_stream([[(WS, "    \n")]]), config)
        [metric] = metrics(records)
        assert metric.value == "80 or less"


class TestAnnotationComments:
    """Tests for control comments on a line of their own."""

    def annotation(self, length, indent=4):
        text = "// phpcs:ignore Generic.Files " + "x" * (length - indent - 30)
        return [(WS, " " * indent), (TokenKind.ANNOTATION, text + "\n")]

    def test_standalone_annotation_is_skipped(self, make_stream, code, config):
        stream = make_stream([code(10), self.annotation(120)])
        records = analyze(stream, config)
        assert diagnostics(records) == []
        assert [m.line for m in metrics(records)] == [1]

    def test_annotation_on_first_line_is_skipped(self, make_stream, config):
        stream = make_stream([self.annotation(120, indent=0)])
        assert analyze(stream, config) == []

    def test_trailing_annotation_is_still_measured(self, make_stream, config):
        stream = make_stream(
            [
                [
                    (TokenKind.IDENTIFIER, "call" + "a" * 60),
                    (TokenKind.PUNCTUATION, ";"),
                    (WS, " "),
                    (TokenKind.ANNOTATION, "// phpcs:ignore Some.Rule.Name.Here\n"),
                ]
            ]
        )
        [diag] = diagnostics(analyze(stream, config))
        assert diag.code == DiagnosticCode.MAX_EXCEEDED
        assert diag.length == 101


class TestUseStatements:
    """Tests for the import line exemption."""

    def use_line(self, name_length):
        return [
            (TokenKind.USE, "use"),
            (WS, " "),
            (TokenKind.IDENTIFIER, "App"),
            (TokenKind.NS_SEPARATOR, "\\"),
            (TokenKind.IDENTIFIER, "N" * name_length),
            (TokenKind.PUNCTUATION, ";"),
            (WS, "\n"),
        ]

    def test_long_use_line_is_skipped(self, make_stream, config):
        records = analyze(make_stream([self.use_line(200)]), config)
        assert records == []

    def test_use_line_after_code(self, make_stream, code, config):
        stream = make_stream([code(10), self.use_line(200), code(95)])
        diags = diagnostics(analyze(stream, config))
        assert [d.line for d in diags] == [3]

    def test_disabled_exemption_reports_use_line(self, make_stream):
        config = LineLengthConfig(
            line_limit=80, absolute_line_limit=100, ignore_use_statements_lines=False
        )
        [diag] = diagnostics(analyze(make_stream([self.use_line(200)]), config))
        assert diag.code == DiagnosticCode.MAX_EXCEEDED

    def test_use_without_separator_is_measured(self, make_stream, config):
        stream = make_stream(
            [
                [
                    (TokenKind.USE, "use"),
                    (WS, " "),
                    (TokenKind.IDENTIFIER, "T" * 100),
                    (TokenKind.PUNCTUATION, ";"),
                    (WS, "\n"),
                ]
            ]
        )
        [diag] = diagnostics(analyze(stream, config))
        assert diag.length == 105

    def test_separator_on_previous_line_does_not_exempt(self, make_stream, config):
        stream = make_stream(
            [
                [(TokenKind.IDENTIFIER, "App"), (TokenKind.NS_SEPARATOR, "\\"), (WS, "\n")],
                [
                    (TokenKind.USE, "use"),
                    (WS, " "),
                    (TokenKind.IDENTIFIER, "T" * 90),
                    (WS, "\n"),
                ],
            ]
        )
        [diag] = diagnostics(analyze(stream, config))
        assert diag.line == 2


class TestComments:
    """Tests for comment exemptions."""

    def test_ignore_comments(self, make_stream, comment):
        config = LineLengthConfig(line_limit=80, absolute_line_limit=100, ignore_comments=True)
        text = "// " + " ".join(["word"] * 40)
        records = analyze(make_stream([comment(text)]), config)
        assert diagnostics(records) == []
        # Ignored comments still count towards the metric
        assert len(metrics(records)) == 1

    def test_ignore_comments_applies_to_doc_strings(self, make_stream, comment):
        config = LineLengthConfig(ignore_comments=True)
        text = " ".join(["word"] * 40)
        line = comment(text, indent=3, kind=TokenKind.DOC_COMMENT_STRING)
        assert diagnostics(analyze(make_stream([line]), config)) == []

    def test_unbreakable_url_comment_is_exempt(self, make_stream, comment, config):
        # 200 columns; 90 characters after the last space; indented by 4
        text = "// " + "x" * 102 + " " + "h" * 90
        records = analyze(make_stream([comment(text, indent=4)]), config)
        assert diagnostics(records) == []
        [metric] = metrics(records)
        assert metric.value == "151 or more"

    def test_breakable_comment_is_reported(self, make_stream, comment, config):
        text = "// " + "word " * 20 + "end"
        [diag] = diagnostics(analyze(make_stream([comment(text)]), config))
        assert diag.code == DiagnosticCode.MAX_EXCEEDED
        assert diag.data == (100, 106)

    def test_tail_that_fits_after_wrapping_is_reported(self, make_stream, comment, config):
        # Tail of 70 plus 3 columns of marker indent fits in 80
        text = "// " + "x" * 10 + " " + "u" * 70
        [diag] = diagnostics(analyze(make_stream([comment(text)]), config))
        assert diag.data == (80, 84)

    def test_indent_pushes_tail_over_limit(self, make_stream, comment, config):
        # Same comment indented by 8: tail 70 + indent 11 > 80
        text = "// " + "x" * 10 + " " + "u" * 70
        records = analyze(make_stream([comment(text, indent=8)]), config)
        assert diagnostics(records) == []

    def test_comment_without_spaces_is_exempt(self, make_stream, comment, config):
        text = "//" + "x" * 95
        assert diagnostics(analyze(make_stream([comment(text)]), config)) == []

    def test_doc_comment_string_with_url(self, make_stream, comment, config):
        text = "@see https://example.com/" + "p" * 80
        line = comment(text, indent=7, kind=TokenKind.DOC_COMMENT_STRING)
        assert diagnostics(analyze(make_stream([line]), config)) == []

    def test_short_comment_not_checked_for_breakability(self, make_stream, comment, config):
        records = analyze(make_stream([comment("// short")]), config)
        assert diagnostics(records) == []
        assert len(metrics(records)) == 1


class TestMetrics:
    """Tests for line length bucketing."""

    @pytest.mark.parametrize(
        "length, bucket",
        [
            (1, "80 or less"),
            (80, "80 or less"),
            (81, "81-120"),
            (120, "81-120"),
            (121, "121-150"),
            (150, "121-150"),
            (151, "151 or more"),
            (400, "151 or more"),
        ],
    )
    def test_bucket_bounds_are_inclusive(self, length, bucket):
        assert bucket_for(length) == bucket

    def test_metric_per_measured_line(self, make_stream, code, config):
        stream = make_stream([code(10), code(90), code(130), code(200)])
        records = analyze(stream, config)
        assert [m.value for m in metrics(records)] == [
            "80 or less",
            "81-120",
            "121-150",
            "151 or more",
        ]
        assert all(m.name == "Line length" for m in metrics(records))

    def test_metric_precedes_diagnostic(self, make_stream, code, config):
        records = analyze(make_stream([code(95)]), config)
        assert isinstance(records[0], MetricObservation)
        assert isinstance(records[1], Diagnostic)


class TestAnalyzer:
    """Tests for the analyzer object itself."""

    def test_default_config(self):
        assert LineLengthAnalyzer().config == LineLengthConfig()

    def test_reusable_across_streams(self, make_stream, code, config):
        analyzer = LineLengthAnalyzer(config)
        first = list(analyzer.analyze(make_stream([code(95)])))
        second = list(analyzer.analyze(make_stream([code(95)])))
        assert first == second

    def test_check_line_points_one_past_the_line(self, make_stream, code, config):
        stream = make_stream([code(95), code(10)])
        records = list(LineLengthAnalyzer(config).check_line(stream, 2))
        assert diagnostics(records)[0].data == (80, 95)

    def test_pointer_before_stream_start_fails_fast(self, make_stream, code, config):
        stream = make_stream([code(95)])
        with pytest.raises(TokenStreamError):
            list(LineLengthAnalyzer(config).check_line(stream, 0))
