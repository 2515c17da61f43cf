"""Token types consumed by the line length rule.

A token is one classified lexical unit with its position and rendered
width. Tokens never span physical lines: a construct that does (a block
comment, a multi-line string) is split into one token per line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TokenKind(StrEnum):
    """Token kinds the rule distinguishes."""

    OPEN_TAG = "open_tag"
    WHITESPACE = "whitespace"

    # Comments
    COMMENT = "comment"
    ANNOTATION = "annotation"
    DOC_COMMENT_OPEN = "doc_comment_open"
    DOC_COMMENT_STAR = "doc_comment_star"
    DOC_COMMENT_STRING = "doc_comment_string"
    DOC_COMMENT_CLOSE = "doc_comment_close"

    # Import declarations
    USE = "use"
    NS_SEPARATOR = "ns_separator"

    # Everything else
    IDENTIFIER = "identifier"
    VARIABLE = "variable"
    NUMBER = "number"
    CONSTANT_STRING = "constant_string"
    PUNCTUATION = "punctuation"


# Control comments (e.g. "// phpcs:ignore") skipped when on their own line
ANNOTATION_KINDS: frozenset[TokenKind] = frozenset({TokenKind.ANNOTATION})

# Comment tokens whose text may be exempt when it cannot be wrapped
COMMENT_STRING_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.COMMENT, TokenKind.DOC_COMMENT_STRING}
)

WHITESPACE_KINDS: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE})


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the lexer.

    Attributes:
        kind: Token kind tag.
        content: Raw text, including a trailing line terminator when the
            token owns one.
        line: 1-based source line.
        column: 1-based start column (after tab expansion).
        length: Rendered width of ``content`` without its line terminator.
    """

    kind: TokenKind
    content: str
    line: int
    column: int
    length: int

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError("line must be >= 1")
        if self.column < 1:
            raise ValueError("column must be >= 1")
        if self.length < 0:
            raise ValueError("length must be non-negative")

    @property
    def end_column(self) -> int:
        """Last column occupied by this token (column - 1 when empty)."""
        return self.column + self.length - 1

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.content!r}, L{self.line}:{self.column})"
