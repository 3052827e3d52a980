"""Leaf construction for texmark parser.

Turns content tokens into Leaf nodes and computes each leaf's payload.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from texmark.nodes import Leaf, LeafKind
from texmark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from texmark.parsing.stack import NodeStack

_LEAF_KINDS: dict[TokenKind, LeafKind] = {
    TokenKind.WORD: LeafKind.WORD,
    TokenKind.AT_DELIM: LeafKind.AT_DELIM,
    TokenKind.HEREDOC: LeafKind.RAW_TEX,
    TokenKind.TEX_INLINE_MATH: LeafKind.TEX_INLINE_MATH,
    TokenKind.TEX_DISPLAY_MATH: LeafKind.TEX_DISPLAY_MATH,
    TokenKind.LATEX_INLINE_MATH: LeafKind.LATEX_INLINE_MATH,
    TokenKind.LATEX_DISPLAY_MATH: LeafKind.LATEX_DISPLAY_MATH,
}

# Delimiter width on each side of a math lexeme
_MATH_DELIMITER_WIDTH: dict[TokenKind, int] = {
    TokenKind.TEX_INLINE_MATH: 1,
    TokenKind.TEX_DISPLAY_MATH: 2,
    TokenKind.LATEX_INLINE_MATH: 2,
    TokenKind.LATEX_DISPLAY_MATH: 2,
}

_HEREDOC_BODY_RE = re.compile(r"\ATEX <<< (\w+)[ \t]*\n(.*?)\n?\1\Z", re.DOTALL)


def heredoc_body(lexeme: str) -> str:
    """Text between the opening line and the closing marker of a heredoc.

    Example:
        >>> heredoc_body("TEX <<< END\\n\\\\newpage\\nEND")
        '\\\\newpage'
    """
    match = _HEREDOC_BODY_RE.match(lexeme)
    if match is None:
        return lexeme
    return match.group(2)


def leaf_content(token: Token) -> str:
    """Kind-specific payload for a leaf built from ``token``."""
    match token.kind:
        case TokenKind.AT_DELIM:
            return token.lexeme[1:]
        case TokenKind.HEREDOC:
            return heredoc_body(token.lexeme)
        case kind if kind in _MATH_DELIMITER_WIDTH:
            width = _MATH_DELIMITER_WIDTH[kind]
            return token.lexeme[width:-width]
    return token.lexeme


class LeafParsingMixin:
    """Mixin attaching leaf nodes to the open branch.

    Required Host Attributes:
        - _stack: NodeStack

    Required Host Methods:
        - _ensure_paragraph()
        - _advance()

    """

    _stack: NodeStack

    def _parse_leaf(self, token: Token) -> None:
        self._ensure_paragraph(token)
        leaf = Leaf(
            kind=_LEAF_KINDS[token.kind],
            position=token.position,
            lexeme=token.lexeme,
            right_pad=token.right_pad,
            content=leaf_content(token),
        )
        self._stack.attach(leaf)
        self._advance()

    def _parse_as_word(self, token: Token) -> None:
        """Attach any token as literal text."""
        self._ensure_paragraph(token)
        self._stack.attach(
            Leaf(
                kind=LeafKind.WORD,
                position=token.position,
                lexeme=token.lexeme,
                right_pad=token.right_pad,
                content=token.lexeme,
            )
        )
        self._advance()
