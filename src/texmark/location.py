"""Source positions for tokens, nodes and diagnostics.

Every token and AST node records where it started in the source text.
Positions are plain values: the cursor produces a fresh one each time it
is asked, so they can be stored, compared and shared freely.

Thread Safety:
Position is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A point in the source text.

    Attributes:
        offset: Character offset into the source (0-indexed)
        row: Line number (1-indexed)
        col: Column number (1-indexed)

    Examples:
        >>> pos = Position(offset=4, row=2, col=1)
        >>> str(pos)
        '2:1'
        >>> pos.format("notes.tm")
        'notes.tm:2:1'

    """

    offset: int
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row}:{self.col}"

    def format(self, source_file: str | None = None) -> str:
        """Format position for error messages.

        Args:
            source_file: Optional file name to prefix

        Returns:
            Formatted string like "file.tm:10:5" or "10:5"
        """
        if source_file:
            return f"{source_file}:{self.row}:{self.col}"
        return str(self)

    @classmethod
    def start(cls) -> Position:
        """Position of the first character of any source."""
        return cls(offset=0, row=1, col=1)
