"""Character cursor over the source text.

The Cursor owns the lexer's read position. All movement goes through
``advance()``, which keeps row and column in step with the offset, so any
saved Snapshot can restore the full position exactly.

Conventions shared by every scanner:

- A scanner is entered with the cursor ON the first character of its
  construct.
- It moves the cursor to the LAST character of the construct and calls
  ``capture_marked_substring()``, which is inclusive of that character.
- ``capture_right_pad()`` then steps past the construct and consumes the
  whitespace after it, leaving the cursor on whatever comes next.

Thread Safety:
Cursor instances are single-use and owned by one Lexer.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from texmark.lexer.charsets import INLINE_WHITESPACE, is_whitespace
from texmark.location import Position


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Saved cursor state, enough to rewind completely."""

    offset: int
    row: int
    col: int


class Cursor:
    """Read position over a source string with row/column tracking.

    Usage:
        >>> cur = Cursor("ab cd")
        >>> cur.mark_position()
        >>> cur.advance()
        >>> cur.capture_marked_substring()
        'ab'
        >>> cur.capture_right_pad()
        ' '
        >>> cur.cur_char()
        'c'

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_offset",
        "_row",
        "_col",
        "_mark",
    )

    def __init__(self, source: str) -> None:
        self._source = source
        self._source_len = len(source)
        self._offset = 0
        self._row = 1
        self._col = 1
        self._mark = 0

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def source(self) -> str:
        return self._source

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def position(self) -> Position:
        """Current position as a fresh value."""
        return Position(offset=self._offset, row=self._row, col=self._col)

    def has_source_left(self) -> bool:
        return self._offset < self._source_len

    def cur_char(self) -> str:
        """Character under the cursor, or empty string at end of input."""
        if self._offset >= self._source_len:
            return ""
        return self._source[self._offset]

    def lookahead(self, n: int = 1) -> str:
        """Up to ``n`` characters after the current one.

        Returns fewer characters near the end of input; never raises.
        """
        start = self._offset + 1
        return self._source[start : start + n]

    def lookback(self, n: int = 1) -> str:
        """Up to ``n`` characters before the current one."""
        return self._source[max(0, self._offset - n) : self._offset]

    def is_at_start_of_line(self) -> bool:
        return self._col == 1

    def at_blank_line(self) -> bool:
        """True when the cursor is on a newline that opens an empty line.

        An empty line holds nothing but spaces or tabs before its own
        newline.
        """
        if self.cur_char() != "\n":
            return False
        i = self._offset + 1
        while i < self._source_len and self._source[i] in INLINE_WHITESPACE:
            i += 1
        return i < self._source_len and self._source[i] == "\n"

    def rest_of_line(self) -> str:
        """Text from the cursor up to, not including, the next newline."""
        end = self._source.find("\n", self._offset)
        if end == -1:
            end = self._source_len
        return self._source[self._offset : end]

    # =========================================================================
    # Movement
    # =========================================================================

    def advance(self, n: int = 1) -> None:
        """Move forward ``n`` characters, tracking rows and columns.

        No-op past the end of input.
        """
        for _ in range(n):
            if self._offset >= self._source_len:
                return
            char = self._source[self._offset]
            self._offset += 1
            if char == "\n":
                self._row += 1
                self._col = 1
            else:
                self._col += 1

    def advance_while(self, pred: Callable[[Cursor], bool]) -> None:
        """Advance while ``pred`` holds for the cursor.

        ``pred`` normally inspects ``lookahead()``. Stops on the last
        character of input regardless of the predicate; callers must
        re-check what follows to tell the two outcomes apart.
        """
        while self._offset + 1 < self._source_len and pred(self):
            self.advance()

    def advance_until(self, pred: Callable[[Cursor], bool]) -> None:
        """Advance until ``pred`` holds for the cursor (see advance_while)."""
        while self._offset + 1 < self._source_len and not pred(self):
            self.advance()

    def advance_while_escaping(
        self,
        stop: Callable[[Cursor], bool],
        escapable: frozenset[str],
    ) -> None:
        """Advance until ``stop`` holds, stepping over escape pairs.

        A backslash ahead followed by an escapable character is consumed
        together with that character and never triggers ``stop``. A
        backslash ahead followed by anything else ends the run.
        """
        while self._offset + 1 < self._source_len:
            if self.lookahead() == "\\":
                if self.lookahead(2)[1:] in escapable:
                    self.advance(2)
                    continue
                return
            if stop(self):
                return
            self.advance()

    # =========================================================================
    # Capture
    # =========================================================================

    def mark_position(self) -> None:
        self._mark = self._offset

    def capture_marked_substring(self) -> str:
        """Source from the mark through the current character, inclusive."""
        return self._source[self._mark : self._offset + 1]

    def capture_right_pad(self) -> str:
        """Step past the current character and consume trailing whitespace.

        Single newlines and the indentation after them are part of the pad
        and are consumed with it, so the next token starts on the following
        line. Only a newline that opens an empty line is left unconsumed,
        for the lexer to turn into an EMPTY_ROW.

        Returns:
            The consumed whitespace.
        """
        self.advance()
        start = self._offset
        while (
            self._offset < self._source_len
            and is_whitespace(self._source[self._offset])
            and not self.at_blank_line()
        ):
            self.advance()
        return self._source[start : self._offset]

    # =========================================================================
    # Backtracking
    # =========================================================================

    def snapshot(self) -> Snapshot:
        return Snapshot(offset=self._offset, row=self._row, col=self._col)

    def backtrack_to_snapshot(self, snap: Snapshot) -> None:
        """Restore offset, row and column from ``snap``."""
        self._offset = snap.offset
        self._row = snap.row
        self._col = snap.col
