"""
Minimal line-oriented lexer for PHP-flavoured source.

Produces just enough token structure for the line length rule:
whitespace, comments (line, block, doc and annotation comments), ``use``
keywords, namespace separators, and a coarse classification of
everything else. It is not a PHP parser; heredocs, inline HTML and
interpolation are not understood.

Conventions follow the usual code sniffer token layout:
- Tokens never span lines; block comments and strings are split per line.
- A doc comment line's leading ``*`` is its own token, so doc text starts
  at the column where the words start.
- Line comments, doc comment text, open tags and unterminated strings
  own the line terminator that follows them.
- Otherwise the terminator is whitespace, merged with any trailing
  spaces, so a line ending in ``"  \\n"`` measures those two spaces.
- ``length`` excludes the terminator, so an empty line is a single
  zero-length whitespace token at column 1.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from linegauge.constants import ANNOTATION_PREFIXES
from linegauge.utils.logger import logger

from .stream import TokenStream
from .types import Token, TokenKind

_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")
_EOL_RE = re.compile(r"\r\n|\r|\n")

_OPEN_TAG_RE = re.compile(r"<\?php", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"[ \t\f\v]+")
_VARIABLE_RE = re.compile(r"\$[A-Za-z_\x80-\uffff][\w\x80-\uffff]*")
_NUMBER_RE = re.compile(r"\d[\w.]*")
_IDENT_RE = re.compile(r"[A-Za-z_\x80-\uffff][\w\x80-\uffff]*")

# Kinds that swallow the line terminator that follows them
_EOL_OWNING_KINDS = frozenset({
    TokenKind.OPEN_TAG,
    TokenKind.COMMENT,
    TokenKind.ANNOTATION,
    TokenKind.DOC_COMMENT_STRING,
})


def detect_eol(source: str) -> str:
    """Return the first line terminator in ``source`` (default ``\\n``)."""
    match = _EOL_RE.search(source)
    return match.group(0) if match else "\n"


def tokenize(source: str, tab_width: int = 0) -> TokenStream:
    """Tokenize ``source`` into a TokenStream.

    Args:
        source: File contents.
        tab_width: Tab stop width for column/length computation. 0 counts
            a tab as a single column.

    Returns:
        TokenStream carrying the detected line terminator.
    """
    lexer = Lexer(source, tab_width=tab_width)
    stream = TokenStream(lexer.tokenize(), eol_char=detect_eol(source))
    logger.debug(f"Tokenized {len(stream)} tokens (eol={stream.eol_char!r}, tab_width={tab_width})")
    return stream


class Lexer:
    """Line-by-line tokenizer.

    Usage:
        lexer = Lexer(source_text, tab_width=4)
        tokens = list(lexer.tokenize())
    """

    def __init__(self, source: str, tab_width: int = 0):
        if tab_width < 0:
            raise ValueError("tab_width must be non-negative")
        self.source = source
        self.tab_width = tab_width
        # State carried across lines
        self._in_doc = False
        self._in_block = False
        self._string_quote: str | None = None

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens for the whole source, in order."""
        for line_no, match in enumerate(_LINE_RE.finditer(self.source), 1):
            yield from self._lex_line(match.group(0), line_no)

    # ------------------------------------------------------------------
    # Per-line scanning
    # ------------------------------------------------------------------

    def _lex_line(self, raw: str, line_no: int) -> Iterator[Token]:
        eol_match = _EOL_RE.search(raw)
        terminator = eol_match.group(0) if eol_match else ""
        body = raw[: len(raw) - len(terminator)]

        parts = self._split(body)

        if terminator:
            if parts and (parts[-1][0] in _EOL_OWNING_KINDS or self._string_open_at_eol(parts)):
                kind, text = parts[-1]
                parts[-1] = (kind, text + terminator)
            elif parts and parts[-1][0] == TokenKind.WHITESPACE:
                parts[-1] = (TokenKind.WHITESPACE, parts[-1][1] + terminator)
            else:
                parts.append((TokenKind.WHITESPACE, terminator))

        column = 1
        for kind, text in parts:
            visible = text[: len(text) - len(terminator)] if terminator and text.endswith(terminator) else text
            width = self._width(visible, column)
            yield Token(kind=kind, content=text, line=line_no, column=column, length=width)
            column += width

    def _string_open_at_eol(self, parts: list[tuple[TokenKind, str]]) -> bool:
        return self._string_quote is not None and parts[-1][0] == TokenKind.CONSTANT_STRING

    def _split(self, body: str) -> list[tuple[TokenKind, str]]:
        parts: list[tuple[TokenKind, str]] = []
        pos = 0
        n = len(body)

        while pos < n:
            if self._in_doc or self._in_block:
                pos = self._scan_comment_body(body, pos, parts)
                continue

            if self._string_quote is not None:
                end, closed = _scan_string(body, pos, self._string_quote)
                parts.append((TokenKind.CONSTANT_STRING, body[pos:end]))
                if closed:
                    self._string_quote = None
                pos = end
                continue

            ch = body[pos]

            if match := _OPEN_TAG_RE.match(body, pos):
                parts.append((TokenKind.OPEN_TAG, match.group(0)))
                pos = match.end()
            elif match := _WHITESPACE_RE.match(body, pos):
                parts.append((TokenKind.WHITESPACE, match.group(0)))
                pos = match.end()
            elif body.startswith("/**", pos) and not body.startswith("/**/", pos):
                parts.append((TokenKind.DOC_COMMENT_OPEN, "/**"))
                self._in_doc = True
                pos += 3
            elif body.startswith("/*", pos):
                close = body.find("*/", pos + 2)
                if close == -1:
                    parts.append((TokenKind.COMMENT, body[pos:]))
                    self._in_block = True
                    pos = n
                else:
                    parts.append((TokenKind.COMMENT, body[pos : close + 2]))
                    pos = close + 2
            elif body.startswith("//", pos) or (ch == "#" and not body.startswith("#[", pos)):
                text = body[pos:]
                parts.append((_classify_line_comment(text), text))
                pos = n
            elif ch in "'\"":
                end, closed = _scan_string(body, pos + 1, ch)
                parts.append((TokenKind.CONSTANT_STRING, body[pos:end]))
                if not closed:
                    self._string_quote = ch
                pos = end
            elif match := _VARIABLE_RE.match(body, pos):
                parts.append((TokenKind.VARIABLE, match.group(0)))
                pos = match.end()
            elif match := _NUMBER_RE.match(body, pos):
                parts.append((TokenKind.NUMBER, match.group(0)))
                pos = match.end()
            elif match := _IDENT_RE.match(body, pos):
                word = match.group(0)
                kind = TokenKind.USE if word.lower() == "use" else TokenKind.IDENTIFIER
                parts.append((kind, word))
                pos = match.end()
            elif ch == "\\":
                parts.append((TokenKind.NS_SEPARATOR, ch))
                pos += 1
            else:
                parts.append((TokenKind.PUNCTUATION, ch))
                pos += 1

        return parts

    def _scan_comment_body(self, body: str, pos: int, parts: list[tuple[TokenKind, str]]) -> int:
        """Consume text inside an open block or doc comment.

        In a doc comment, a ``*`` that leads the line is its own token, as
        is the whitespace after it, so the text token starts at the column
        where the comment text itself starts.
        """
        at_line_start = all(kind == TokenKind.WHITESPACE for kind, _ in parts)

        if match := _WHITESPACE_RE.match(body, pos):
            parts.append((TokenKind.WHITESPACE, match.group(0)))
            pos = match.end()
            if pos >= len(body):
                return pos

        if (
            self._in_doc
            and at_line_start
            and body.startswith("*", pos)
            and not body.startswith("*/", pos)
        ):
            parts.append((TokenKind.DOC_COMMENT_STAR, "*"))
            pos += 1
            if match := _WHITESPACE_RE.match(body, pos):
                parts.append((TokenKind.WHITESPACE, match.group(0)))
                pos = match.end()
            if pos >= len(body):
                return pos

        text_kind = TokenKind.DOC_COMMENT_STRING if self._in_doc else TokenKind.COMMENT
        close = body.find("*/", pos)

        if close == -1:
            parts.append((text_kind, body[pos:]))
            return len(body)

        if self._in_doc:
            if close > pos:
                parts.append((text_kind, body[pos:close]))
            parts.append((TokenKind.DOC_COMMENT_CLOSE, "*/"))
        else:
            parts.append((TokenKind.COMMENT, body[pos : close + 2]))

        self._in_doc = False
        self._in_block = False
        return close + 2

    def _width(self, text: str, column: int) -> int:
        """Rendered width of ``text`` starting at ``column``."""
        if not self.tab_width or "\t" not in text:
            return len(text)
        col = column
        for ch in text:
            if ch == "\t":
                col += self.tab_width - ((col - 1) % self.tab_width)
            else:
                col += 1
        return col - column


def _scan_string(body: str, pos: int, quote: str) -> tuple[int, bool]:
    """Scan to just past the closing ``quote``; return (end, closed)."""
    i = pos
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1, True
        i += 1
    return n, False


def _classify_line_comment(text: str) -> TokenKind:
    remainder = text.lstrip("/#").lstrip().lower()
    if remainder.startswith(ANNOTATION_PREFIXES):
        return TokenKind.ANNOTATION
    return TokenKind.COMMENT
