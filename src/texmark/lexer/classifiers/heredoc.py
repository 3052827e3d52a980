"""Raw TeX heredoc classifier mixin.

A heredoc passes a block of TeX through untouched::

    TEX <<< END
    \\begin{tabular}{ll} a & b \\end{tabular}
    END

The opening line names a marker; the block ends at the first line that
consists of exactly that marker.
"""

from __future__ import annotations

import re

from texmark.errors import ErrorKind
from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind

HEREDOC_OPEN_RE = re.compile(r"TEX <<< (\w+)[ \t]*")

HEREDOC_HINT = "\n".join(
    [
        "A delimiting identifier is needed to mark the",
        "beginning and end of the raw tex code in the",
        "heredoc block. For example, the identifiers 'EOF'",
        "and 'END' are common, like so:",
        "",
        "    TEX <<< END",
        "    % Here goes your TeX code.",
        "    END",
    ]
)


class HeredocClassifierMixin:
    """Mixin providing heredoc block classification."""

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

    def _try_heredoc(self) -> bool:
        """Try to lex a ``TEX <<< ID`` block at the cursor.

        Reports UnexpectedChar when the opening line has no usable
        identifier and UnclosedSequence when the closing marker never
        appears. In both cases nothing is consumed and the caller lexes
        the text as words instead.

        Returns:
            True if a HEREDOC token was emitted.
        """
        cur = self._cursor
        if not (cur.is_at_start_of_line() and cur.lookahead(7) == "EX <<< "):
            return False

        start = cur.position
        line = cur.rest_of_line()
        opening = HEREDOC_OPEN_RE.match(line)
        if opening is None or opening.end() != len(line):
            bad = len("TEX <<< ") if opening is None else opening.end()
            self._report(
                ErrorKind.UNEXPECTED_CHAR,
                Position(offset=start.offset + bad, row=start.row, col=start.col + bad),
                fatal=False,
                subject=line[bad : bad + 1] or "\n",
                expected="delimiting identifier",
                hint=HEREDOC_HINT,
            )
            return False

        marker = opening.group(1)
        closing_re = re.compile(rf"\n{re.escape(marker)}(?=\n|\Z)")
        closing = closing_re.search(cur.source, start.offset + len(line))
        if closing is None:
            self._report(
                ErrorKind.UNCLOSED_SEQUENCE,
                start,
                fatal=False,
                subject=f"TEX <<< {marker}",
                expected=marker,
                hint=HEREDOC_HINT,
            )
            return False

        cur.mark_position()
        cur.advance(closing.end() - 1 - start.offset)
        lexeme = cur.capture_marked_substring()
        self._emit(TokenKind.HEREDOC, lexeme, start, cur.capture_right_pad())
        return True
