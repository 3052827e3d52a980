"""List item marker classifier mixin."""

from __future__ import annotations

import re

from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind

_UNORDERED_RE = re.compile(r"-[ \t]")
_ORDERED_RE = re.compile(r"(\d+\.)[ \t]")


class ListClassifierMixin:
    """Mixin providing list marker classification.

    Both marker styles are recognized in column 1 only and need a space
    or tab after them. Anything else falls through to word scanning.
    """

    _cursor: Cursor

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        """Append a token. Implemented by Lexer."""
        raise NotImplementedError

    def _try_unordered_item(self) -> bool:
        cur = self._cursor
        if not cur.is_at_start_of_line() or _UNORDERED_RE.match(cur.rest_of_line()) is None:
            return False

        start = cur.position
        self._emit(TokenKind.UL_ITEM, "-", start, cur.capture_right_pad())
        return True

    def _try_ordered_item(self) -> bool:
        """Try to lex ``<digits>.`` followed by whitespace."""
        cur = self._cursor
        if not cur.is_at_start_of_line():
            return False

        match = _ORDERED_RE.match(cur.rest_of_line())
        if match is None:
            return False

        start = cur.position
        cur.mark_position()
        cur.advance(len(match.group(1)) - 1)
        lexeme = cur.capture_marked_substring()
        self._emit(TokenKind.OL_ITEM, lexeme, start, cur.capture_right_pad())
        return True
