"""Emphasis parsing for texmark parser.

Emphasis delimiters toggle: the same delimiter opens a branch and, when
that branch is on top of the stack, closes it. Delimiters of different
kinds nest freely. An opener that is never closed is demoted back to
text when its paragraph ends.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texmark.nodes import BranchKind
from texmark.parsing.stack import OpenBranch
from texmark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from texmark.parsing.stack import NodeStack

EMPHASIS_KINDS: dict[TokenKind, BranchKind] = {
    TokenKind.STAR: BranchKind.ITALIC,
    TokenKind.DOUBLE_STAR: BranchKind.BOLD,
    TokenKind.DOUBLE_UNDERSCORE: BranchKind.UNDERLINE,
    TokenKind.DOUBLE_TILDE: BranchKind.STRIKETHROUGH,
}


class EmphasisMixin:
    """Mixin for emphasis delimiter handling.

    Required Host Attributes:
        - _stack: NodeStack

    Required Host Methods:
        - _ensure_paragraph()
        - _advance()

    """

    _stack: NodeStack

    def _parse_emphasis(self, token: Token) -> None:
        self._ensure_paragraph(token)
        kind = EMPHASIS_KINDS[token.kind]
        top = self._stack.top

        if top is not None and top.kind is kind:
            self._stack.pop(right_pad=token.right_pad)
        else:
            self._stack.push(
                OpenBranch(
                    kind=kind,
                    position=token.position,
                    opener=token.lexeme,
                    left_pad=token.right_pad,
                )
            )
        self._advance()
