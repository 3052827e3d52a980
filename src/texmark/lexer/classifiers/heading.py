"""Heading marker classifier mixin."""

from __future__ import annotations

import re

from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind

# One to three '#', optional '*', then a space or tab
_HEADING_RE = re.compile(r"(#{1,3}\*?)[ \t]")

_HEADING_KINDS: dict[str, TokenKind] = {
    "#": TokenKind.HASH,
    "##": TokenKind.DOUBLE_HASH,
    "###": TokenKind.TRIPLE_HASH,
    "#*": TokenKind.HASH_STAR,
    "##*": TokenKind.DOUBLE_HASH_STAR,
    "###*": TokenKind.TRIPLE_HASH_STAR,
}


class HeadingClassifierMixin:
    """Mixin providing heading marker classification."""

    _cursor: Cursor

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        """Append a token. Implemented by Lexer."""
        raise NotImplementedError

    def _try_heading(self) -> bool:
        """Try to lex a heading marker at the cursor.

        Heading markers only count in column 1 and must be followed by
        a space or tab; ``#foo`` and ``####`` are ordinary words.

        Returns:
            True if a heading token was emitted.
        """
        cur = self._cursor
        if not cur.is_at_start_of_line():
            return False

        match = _HEADING_RE.match(cur.rest_of_line())
        if match is None:
            return False

        marker = match.group(1)
        start = cur.position
        cur.mark_position()
        cur.advance(len(marker) - 1)
        lexeme = cur.capture_marked_substring()
        self._emit(_HEADING_KINDS[marker], lexeme, start, cur.capture_right_pad())
        return True
