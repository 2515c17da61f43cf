"""Fixtures for line length analysis tests.

Streams are built by hand from (kind, text) pairs so the rule is tested
independently of the lexer. Columns and lengths are derived from the
text; a trailing line terminator does not count towards length.
"""

import pytest

from linegauge.tokens import Token, TokenKind, TokenStream


def build_stream(lines, eol="\n"):
    tokens = []
    for line_no, parts in enumerate(lines, 1):
        column = 1
        for kind, text in parts:
            visible = text[: -len(eol)] if text.endswith(eol) else text
            tokens.append(Token(kind, text, line_no, column, len(visible)))
            column += len(visible)
    return TokenStream(tokens, eol_char=eol)


def code_line(length, indent=0):
    parts = [(TokenKind.WHITESPACE, " " * indent)] if indent else []
    parts.append((TokenKind.IDENTIFIER, "a" * (length - indent)))
    parts.append((TokenKind.WHITESPACE, "\n"))
    return parts


def comment_line(text, indent=0, kind=TokenKind.COMMENT):
    parts = [(TokenKind.WHITESPACE, " " * indent)] if indent else []
    parts.append((kind, text + "\n"))
    return parts


def blank_line():
    return [(TokenKind.WHITESPACE, "\n")]


@pytest.fixture
def make_stream():
    """Build a TokenStream from a list of lines of (kind, text) pairs."""
    return build_stream


@pytest.fixture
def code():
    """Line of plain code measuring exactly ``length`` columns."""
    return code_line


@pytest.fixture
def comment():
    """Comment line; measures ``indent + len(text)`` columns."""
    return comment_line


@pytest.fixture
def blank():
    return blank_line
