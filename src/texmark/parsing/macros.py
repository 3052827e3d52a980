"""Macro definition parsing for texmark parser.

Definitions look like::

    macro vec x = { \\mathbf{x} }

They are collected beside the tree, in source order, for the renderer's
preamble. Call sites are not expanded.
"""

from __future__ import annotations

import re

from texmark.nodes import MacroDef
from texmark.tokens import Token

_MACRO_DEF_RE = re.compile(
    r"macro\s+(?P<name>[^\s=]+)(?P<params>(?:\s+[^\s=]+)*)\s*=\s*\{(?P<body>.*)\}\s*",
    re.DOTALL,
)


def parse_macro_def(token: Token) -> MacroDef | None:
    """Parse a MACRO_DEF lexeme.

    Args:
        token: A MACRO_DEF token

    Returns:
        MacroDef, or None if the lexeme does not have the definition shape.

    Example:
        >>> from texmark.lexer import Lexer
        >>> token = Lexer("macro pair a b = { (a, b) }").tokenize()[1]
        >>> parse_macro_def(token)
        MacroDef(name='pair', params=('a', 'b'), body='(a, b)', position=...)
    """
    match = _MACRO_DEF_RE.fullmatch(token.lexeme)
    if match is None:
        return None
    return MacroDef(
        name=match.group("name"),
        params=tuple(match.group("params").split()),
        body=match.group("body").strip(),
        position=token.position,
    )


class MacroParsingMixin:
    """Mixin collecting macro definitions.

    Required Host Attributes:
        - _macros: list[MacroDef]

    Required Host Methods:
        - _parse_as_word()
        - _advance()

    """

    _macros: list[MacroDef]

    def _parse_macro_def(self, token: Token) -> None:
        definition = parse_macro_def(token)
        if definition is None:
            self._parse_as_word(token)
            return
        self._macros.append(definition)
        self._advance()
