"""Math span scanner mixin.

Handles ``$...$``, ``$$...$$``, ``\\(...\\)`` and ``\\[...\\]``. The span
is kept verbatim, delimiters included; nothing inside it is lexed.
"""

from __future__ import annotations

from texmark.errors import ErrorKind
from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind

TEX_MATH_HINT = "\n".join(
    [
        "If you did not mean to insert a math delimiter,",
        "you should escape the character with a backslash.",
        "For example: '\\$\\$'",
    ]
)

LATEX_MATH_HINT = "\n".join(
    [
        "Math opened with '\\(' or '\\[' runs until the matching",
        "'\\)' or '\\]'. Add the closing delimiter where the math ends.",
    ]
)


class MathScannerMixin:
    """Mixin providing math span scanning with backtracking."""

    _cursor: Cursor

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        """Append a token. Implemented by Lexer."""
        raise NotImplementedError

    def _report(
        self,
        kind: ErrorKind,
        position: Position,
        *,
        fatal: bool,
        subject: str = "",
        expected: str | None = None,
        hint: str | None = None,
    ) -> None:
        """Record a diagnostic. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_word(self, min_length: int = 1) -> None:
        """Scan a WORD. Implemented by WordScannerMixin."""
        raise NotImplementedError

    def _scan_math(self, opener: str, closer: str, kind: TokenKind) -> None:
        """Scan a math span from ``opener`` through the first ``closer``.

        If input ends before ``closer`` appears, report UnclosedSequence,
        rewind, and lex the opener as the start of an ordinary word.

        Args:
            opener: Opening delimiter under the cursor
            closer: Closing delimiter to search for
            kind: Token kind to emit on success
        """
        cur = self._cursor
        start = cur.position
        snap = cur.snapshot()
        cur.mark_position()

        cur.advance(len(opener) - 1)
        width = len(closer)
        cur.advance_until(lambda c: c.lookahead(width) == closer)

        if cur.lookahead(width) != closer:
            self._report(
                ErrorKind.UNCLOSED_SEQUENCE,
                start,
                fatal=False,
                subject=opener,
                expected=closer,
                hint=TEX_MATH_HINT if opener.startswith("$") else LATEX_MATH_HINT,
            )
            cur.backtrack_to_snapshot(snap)
            self._scan_word(min_length=len(opener))
            return

        cur.advance(width)
        lexeme = cur.capture_marked_substring()
        self._emit(kind, lexeme, start, cur.capture_right_pad())
