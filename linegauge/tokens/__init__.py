"""Token model for the line length rule.

Components:
- Token / TokenKind: a classified lexical unit and its kind tag
- TokenStream: read-only token sequence with bounded backward search
- tokenize(): minimal lexer producing a TokenStream from source text

Usage:
    from linegauge.tokens import tokenize

    stream = tokenize(source, tab_width=4)
    for token in stream:
        print(token.line, token.column, token.kind)
"""

from .types import (
    ANNOTATION_KINDS,
    COMMENT_STRING_KINDS,
    WHITESPACE_KINDS,
    Token,
    TokenKind,
)
from .stream import TokenStream
from .lexer import Lexer, detect_eol, tokenize

__all__ = [
    "ANNOTATION_KINDS",
    "COMMENT_STRING_KINDS",
    "WHITESPACE_KINDS",
    "Token",
    "TokenKind",
    "TokenStream",
    "Lexer",
    "detect_eol",
    "tokenize",
]
