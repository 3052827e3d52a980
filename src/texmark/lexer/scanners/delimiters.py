"""Scanners for fixed delimiters and small inline constructs.

Covers emphasis and link punctuation, ``@`` references, ``%`` comments
and blank-line separators.
"""

from __future__ import annotations

from texmark.lexer.charsets import is_control, is_whitespace
from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind


def _continues_reference(cur: Cursor) -> bool:
    nxt = cur.lookahead()
    return bool(nxt) and not is_whitespace(nxt) and not is_control(nxt)


class DelimiterScannerMixin:
    """Mixin providing delimiter, reference, comment and blank-line scanning."""

    _cursor: Cursor

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        """Append a token. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_word(self, min_length: int = 1) -> None:
        """Scan a WORD. Implemented by WordScannerMixin."""
        raise NotImplementedError

    def _scan_fixed(self, kind: TokenKind, lexeme: str) -> None:
        """Emit ``kind`` for the literal ``lexeme`` under the cursor."""
        cur = self._cursor
        start = cur.position
        cur.advance(len(lexeme) - 1)
        self._emit(kind, lexeme, start, cur.capture_right_pad())

    def _scan_star(self) -> None:
        if self._cursor.lookahead() == "*":
            self._scan_fixed(TokenKind.DOUBLE_STAR, "**")
        else:
            self._scan_fixed(TokenKind.STAR, "*")

    def _scan_doubled(self, kind: TokenKind) -> None:
        """``__`` or ``~~``; a single character is just text."""
        cur = self._cursor
        char = cur.cur_char()
        if cur.lookahead() == char:
            self._scan_fixed(kind, char * 2)
        else:
            self._scan_word()

    def _scan_at(self) -> None:
        """Scan ``@name``; a lone ``@`` is a word."""
        cur = self._cursor
        if not _continues_reference(cur):
            self._scan_word()
            return

        start = cur.position
        cur.mark_position()
        cur.advance_while(_continues_reference)
        lexeme = cur.capture_marked_substring()
        self._emit(TokenKind.AT_DELIM, lexeme, start, cur.capture_right_pad())

    def _skip_comment(self) -> None:
        """Consume ``%`` through the end of the line, keeping the newline.

        Leaving the newline in place lets a comment sit directly above a
        blank line without swallowing the paragraph break.
        """
        cur = self._cursor
        cur.advance_until(lambda c: c.lookahead() == "\n")
        cur.advance()

    def _scan_empty_row(self) -> None:
        """Scan a blank-line separator and all whitespace after it."""
        cur = self._cursor
        start = cur.position
        cur.mark_position()
        cur.advance_while(lambda c: is_whitespace(c.lookahead()))
        lexeme = cur.capture_marked_substring()
        cur.advance()
        self._emit(TokenKind.EMPTY_ROW, lexeme, start, "")
