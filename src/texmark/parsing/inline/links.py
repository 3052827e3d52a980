"""Link and image parsing for texmark parser.

Syntax: ``[text](reference)`` and ``![caption](reference)``.

The closing ``](`` must be followed by exactly a WORD (the reference)
and a ``)``. When it is not, the attempted link is demoted to text and
the ``](`` itself becomes a word. A link may contain an image and an
image may contain a link, but neither nests inside its own kind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texmark.nodes import BranchKind
from texmark.parsing.stack import OpenBranch
from texmark.tokens import Token, TokenKind
from texmark.utils.logger import get_logger

if TYPE_CHECKING:
    from texmark.parsing.stack import NodeStack

logger = get_logger(__name__)

LINK_KINDS: dict[TokenKind, BranchKind] = {
    TokenKind.LEFT_BRACKET: BranchKind.LINK,
    TokenKind.BANG_BRACKET: BranchKind.IMAGE,
}


class LinkParsingMixin:
    """Mixin for link and image handling.

    Required Host Attributes:
        - _stack: NodeStack

    Required Host Methods:
        - _ensure_paragraph()
        - _parse_as_word()
        - _next_kinds_are()
        - _row_ends_before()
        - _peek()
        - _advance()

    """

    _stack: NodeStack

    def _parse_link_open(self, token: Token) -> None:
        self._ensure_paragraph(token)
        kind = LINK_KINDS[token.kind]

        if self._stack.find_kind(kind) is not None:
            self._parse_as_word(token)
            return

        self._stack.push(
            OpenBranch(
                kind=kind,
                position=token.position,
                opener=token.lexeme,
                left_pad=token.right_pad,
            )
        )
        self._advance()

    def _parse_link_close(self, token: Token) -> None:
        """Handle ``](``: close the nearest link or image, or demote it."""
        stack = self._stack
        if stack.collapse_to_link_or_image() is None:
            self._parse_as_word(token)
            return

        has_target = self._next_kinds_are(TokenKind.WORD, TokenKind.RIGHT_PAREN)
        # A heading row cannot take its target from a later line
        if has_target and not self._row_ends_before(self._peek(2)):
            reference = self._peek(1).lexeme
            closer = self._peek(2)
            stack.pop(right_pad=closer.right_pad, reference=reference)
            self._advance(3)
            return

        logger.debug("Malformed link target at %s; keeping text", token.position)
        stack.collapse_to_previous()
        self._parse_as_word(token)
