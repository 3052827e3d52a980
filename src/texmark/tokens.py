"""Token and TokenKind definitions for the texmark lexer.

The lexer produces a list of Token objects that the parser consumes.
Each Token has a kind, the exact source text it spans (its lexeme), the
whitespace that followed it (its right pad) and its starting position.

Concatenating ``lexeme + right_pad`` over the token stream reproduces the
source text, which is what makes lossless demotion of unmatched markup
possible in the parser.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from texmark.location import Position


class TokenKind(Enum):
    """Token kinds produced by the lexer.

    Organized by category:
    - Stream structure (SOF, EOF, EMPTY_ROW)
    - Leaf content (words, references, math, raw TeX, macro definitions)
    - Emphasis delimiters
    - Heading markers
    - Link and image delimiters
    - List item markers

    """

    # Stream structure
    SOF = auto()
    EOF = auto()
    EMPTY_ROW = auto()  # blank line(s) separating paragraphs

    # Leaf content
    WORD = auto()
    AT_DELIM = auto()  # @label
    MACRO_DEF = auto()  # macro name args = { body }
    HEREDOC = auto()  # TEX <<< ID ... ID
    TEX_INLINE_MATH = auto()  # $...$
    TEX_DISPLAY_MATH = auto()  # $$...$$
    LATEX_INLINE_MATH = auto()  # \(...\)
    LATEX_DISPLAY_MATH = auto()  # \[...\]

    # Emphasis
    STAR = auto()  # *
    DOUBLE_STAR = auto()  # **
    DOUBLE_UNDERSCORE = auto()  # __
    DOUBLE_TILDE = auto()  # ~~

    # Headings
    HASH = auto()  # #
    DOUBLE_HASH = auto()  # ##
    TRIPLE_HASH = auto()  # ###
    HASH_STAR = auto()  # #*
    DOUBLE_HASH_STAR = auto()  # ##*
    TRIPLE_HASH_STAR = auto()  # ###*

    # Links and images
    LEFT_BRACKET = auto()  # [
    BANG_BRACKET = auto()  # ![
    BRACKET_PAREN = auto()  # ](
    RIGHT_PAREN = auto()  # )

    # Lists
    UL_ITEM = auto()  # -
    OL_ITEM = auto()  # 1.

    @property
    def is_structural(self) -> bool:
        """True for kinds that carry no source text of their own."""
        return self in _STRUCTURAL

    @property
    def is_emphasis(self) -> bool:
        return self in _EMPHASIS

    @property
    def is_heading(self) -> bool:
        return self in _HEADINGS

    @property
    def is_math(self) -> bool:
        return self in _MATH

    @property
    def is_leaf_content(self) -> bool:
        """True for kinds that become a leaf node as-is."""
        return self in _LEAF_CONTENT


_STRUCTURAL = frozenset({TokenKind.SOF, TokenKind.EOF})

_EMPHASIS = frozenset(
    {
        TokenKind.STAR,
        TokenKind.DOUBLE_STAR,
        TokenKind.DOUBLE_UNDERSCORE,
        TokenKind.DOUBLE_TILDE,
    }
)

_HEADINGS = frozenset(
    {
        TokenKind.HASH,
        TokenKind.DOUBLE_HASH,
        TokenKind.TRIPLE_HASH,
        TokenKind.HASH_STAR,
        TokenKind.DOUBLE_HASH_STAR,
        TokenKind.TRIPLE_HASH_STAR,
    }
)

_MATH = frozenset(
    {
        TokenKind.TEX_INLINE_MATH,
        TokenKind.TEX_DISPLAY_MATH,
        TokenKind.LATEX_INLINE_MATH,
        TokenKind.LATEX_DISPLAY_MATH,
    }
)

_LEAF_CONTENT = _MATH | {TokenKind.WORD, TokenKind.AT_DELIM, TokenKind.HEREDOC}


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        kind: The token kind
        lexeme: Exact source text of the token (escapes already resolved
            for WORD tokens)
        right_pad: Whitespace that immediately followed the token
        position: Where the lexeme starts

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    kind: TokenKind
    lexeme: str
    right_pad: str
    position: Position

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.lexeme
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind.name}, {val!r}, {self.position})"

    @property
    def row(self) -> int:
        """Line number (convenience accessor)."""
        return self.position.row

    @property
    def col(self) -> int:
        """Column number (convenience accessor)."""
        return self.position.col

    @property
    def text(self) -> str:
        """Lexeme followed by its right pad."""
        return self.lexeme + self.right_pad
