"""Token cursor for the texmark parser.

The parser walks the token list strictly forward. Lookahead is bounded:
the only construct that inspects more than one token ahead is a link
target, which needs the next two.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texmark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from collections.abc import Sequence


class TokenNavigationMixin:
    """Mixin providing forward movement and lookahead over the token list.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int
        - _pos: int
        - _current: Token | None (None once past the last token)

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None

    def _advance(self, count: int = 1) -> Token | None:
        """Move ``count`` tokens forward and return the new current token."""
        self._pos += count
        self._current = self._tokens[self._pos] if self._pos < self._tokens_len else None
        return self._current

    def _peek(self, offset: int = 1) -> Token | None:
        pos = self._pos + offset
        if 0 <= pos < self._tokens_len:
            return self._tokens[pos]
        return None

    def _next_kinds_are(self, *kinds: TokenKind) -> bool:
        """True when the tokens after the current one have exactly ``kinds``, in order."""
        for offset, kind in enumerate(kinds, start=1):
            token = self._peek(offset)
            if token is None or token.kind is not kind:
                return False
        return True
