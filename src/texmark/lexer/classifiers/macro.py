"""Macro definition classifier mixin."""

from __future__ import annotations

import re

from texmark.lexer.cursor import Cursor
from texmark.location import Position
from texmark.tokens import TokenKind

# Whole-line shape: macro <name> <params...> = { <body> }
MACRO_LINE_RE = re.compile(r"macro[ \t]+[^\s=]+(?:[ \t]+[^\s=]+)*[ \t]*=[ \t]*\{.*\}[ \t]*")


class MacroClassifierMixin:
    """Mixin providing single-line macro definition classification."""

    _cursor: Cursor

    def _emit(self, kind: TokenKind, lexeme: str, start: Position, right_pad: str) -> None:
        """Append a token. Implemented by Lexer."""
        raise NotImplementedError

    def _try_macro_def(self) -> bool:
        """Try to lex a macro definition line starting at column 1.

        The whole line (minus trailing whitespace) becomes the lexeme.
        A line that does not have the definition shape is left alone.

        Returns:
            True if a MACRO_DEF token was emitted.
        """
        cur = self._cursor
        if not cur.is_at_start_of_line():
            return False

        line = cur.rest_of_line()
        if MACRO_LINE_RE.fullmatch(line) is None:
            return False

        lexeme = line.rstrip()
        start = cur.position
        cur.advance(len(lexeme) - 1)
        self._emit(TokenKind.MACRO_DEF, lexeme, start, cur.capture_right_pad())
        return True
