"""Immutable token stream with positional accessors and bounded search."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import overload

from linegauge.types.errors import ErrorContext, TokenStreamError

from .types import Token, TokenKind


class TokenStream:
    """An ordered, read-only sequence of tokens for one source file.

    Besides the tokens themselves the stream carries the file's line
    terminator, which the line length rule needs to recognise trailing
    end-of-line tokens.

    Usage:
        stream = TokenStream(tokens, eol_char="\\n")
        last = len(stream) - 1
        prev_code = stream.find_previous(WHITESPACE_KINDS, last, 0, exclude=True)
    """

    __slots__ = ("_tokens", "_eol_char")

    def __init__(self, tokens: Iterable[Token], eol_char: str = "\n"):
        if not eol_char:
            raise TokenStreamError("eol_char must not be empty")
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self._eol_char = eol_char

    @property
    def eol_char(self) -> str:
        """Line terminator used by the source file."""
        return self._eol_char

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Token, ...]: ...

    def __getitem__(self, index: int | slice) -> Token | tuple[Token, ...]:
        if isinstance(index, slice):
            return self._tokens[index]
        return self._tokens[self._check_index(index)]

    def __repr__(self) -> str:
        return f"TokenStream({len(self._tokens)} tokens, eol={self._eol_char!r})"

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def column_of(self, index: int) -> int:
        return self[index].column

    def line_of(self, index: int) -> int:
        return self[index].line

    def length_of(self, index: int) -> int:
        return self[index].length

    def content_of(self, index: int) -> str:
        return self[index].content

    def kind_of(self, index: int) -> TokenKind:
        return self[index].kind

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_previous(
        self,
        kinds: Iterable[TokenKind],
        start: int,
        end: int = 0,
        exclude: bool = False,
    ) -> int | None:
        """Find the nearest token at or before ``start`` matching ``kinds``.

        Scans backwards from ``start`` down to ``end`` (both inclusive).

        Args:
            kinds: Token kinds to look for.
            start: Index to start scanning from. Clamped to the last token.
            end: Lowest index to inspect. Must be non-negative.
            exclude: When True, find the nearest token whose kind is NOT
                in ``kinds`` instead.

        Returns:
            Index of the matching token, or None when nothing in range
            matches (including an empty range, ``start < end``).

        Raises:
            TokenStreamError: If ``end`` is negative.
        """
        if end < 0:
            raise TokenStreamError(
                f"search bound {end} is negative",
                context=ErrorContext(
                    operation="find_previous",
                    additional_info={"start": start, "end": end},
                ),
            )

        wanted = frozenset(kinds)
        start = min(start, len(self._tokens) - 1)

        for index in range(start, end - 1, -1):
            if (self._tokens[index].kind in wanted) != exclude:
                return index
        return None

    def _check_index(self, index: int) -> int:
        # Negative indices would silently wrap to the end of the file
        if not 0 <= index < len(self._tokens):
            raise TokenStreamError(
                f"token index {index} out of range for stream of {len(self._tokens)} tokens",
                context=ErrorContext(
                    operation="token_access",
                    additional_info={"index": index, "size": len(self._tokens)},
                ),
            )
        return index
