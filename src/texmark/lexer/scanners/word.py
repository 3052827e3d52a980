"""Word scanner mixin.

Words are the fallback token: any run of text that is not markup.
"""

from __future__ import annotations

import re

from texmark.lexer.charsets import (
    ESCAPABLE,
    WORD_STOP_CHARS,
    WORD_STOP_PAIRS,
    is_control,
    is_whitespace,
)
from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind

_ESCAPE_RE = re.compile(r"\\([" + re.escape("".join(sorted(ESCAPABLE))) + r"])")


def unescape_word(raw: str) -> str:
    """Strip the backslash from every escape pair in ``raw``.

    Examples:
        >>> unescape_word(r"50\\%")
        '50%'
        >>> unescape_word(r"\\alpha")
        '\\\\alpha'
    """
    return _ESCAPE_RE.sub(r"\1", raw)


def _ends_word(cur: Cursor) -> bool:
    nxt = cur.lookahead()
    if is_whitespace(nxt) or is_control(nxt):
        return True
    if cur.lookahead(2) in WORD_STOP_PAIRS:
        return True
    return nxt in WORD_STOP_CHARS


class WordScannerMixin:
    """Mixin providing WORD scanning."""

    _cursor: Cursor

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        """Append a token. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_word(self, min_length: int = 1) -> None:
        """Scan a WORD starting at the cursor.

        The character under the cursor always belongs to the word, even
        when it would stop a word elsewhere; this is how stray delimiters
        become literal text. ``min_length`` forces a longer prefix in, for
        rescanning a failed multi-character opener as one word. That
        prefix is kept verbatim, so ``\\[`` stays ``\\[``.

        Args:
            min_length: Number of characters consumed unconditionally
        """
        cur = self._cursor
        start = cur.position
        cur.mark_position()

        if min_length > 1:
            cur.advance(min_length - 1)
        elif cur.cur_char() == "\\" and cur.lookahead() in ESCAPABLE:
            cur.advance()

        cur.advance_while_escaping(_ends_word, ESCAPABLE)
        raw = cur.capture_marked_substring()
        head = raw[:min_length] if min_length > 1 else ""
        lexeme = head + unescape_word(raw[len(head) :])
        self._emit(TokenKind.WORD, lexeme, start, cur.capture_right_pad())
