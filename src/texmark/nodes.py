"""Typed AST nodes for texmark.

The tree has exactly two node shapes:

Node
├── Leaf    (content taken straight from one token: words, math, raw TeX)
└── Branch  (structure with children: paragraphs, headings, emphasis,
             links, images, lists, list items)

Each shape carries a closed kind enum, so consumers resolve a node with a
``match`` on its class and then on ``kind``; nothing is inferred from
which fields happen to be set.

Macro definitions never enter the tree. They are collected beside it on
the Document.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, TypeAlias

from texmark.location import Position

if TYPE_CHECKING:
    from texmark.errors import Diagnostic


class LeafKind(Enum):
    """Kinds of leaf nodes."""

    WORD = auto()
    AT_DELIM = auto()
    RAW_TEX = auto()
    TEX_INLINE_MATH = auto()
    TEX_DISPLAY_MATH = auto()
    LATEX_INLINE_MATH = auto()
    LATEX_DISPLAY_MATH = auto()

    @property
    def is_math(self) -> bool:
        return self in _MATH_LEAVES


class BranchKind(Enum):
    """Kinds of branch nodes."""

    PARAGRAPH = auto()

    # Heading rows
    SECTION = auto()
    SUBSECTION = auto()
    SUBSUBSECTION = auto()
    SECTION_STAR = auto()
    SUBSECTION_STAR = auto()
    SUBSUBSECTION_STAR = auto()

    # Emphasis
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()

    LINK = auto()
    IMAGE = auto()

    ITEMIZE = auto()
    ENUMERATE = auto()
    LIST_ITEM = auto()

    @property
    def is_row(self) -> bool:
        """Heading rows span one source line."""
        return self in _ROWS

    @property
    def is_emphasis(self) -> bool:
        return self in _EMPHASIS

    @property
    def is_list(self) -> bool:
        return self in (BranchKind.ITEMIZE, BranchKind.ENUMERATE)

    @property
    def is_link_or_image(self) -> bool:
        return self in (BranchKind.LINK, BranchKind.IMAGE)


_MATH_LEAVES = frozenset(
    {
        LeafKind.TEX_INLINE_MATH,
        LeafKind.TEX_DISPLAY_MATH,
        LeafKind.LATEX_INLINE_MATH,
        LeafKind.LATEX_DISPLAY_MATH,
    }
)

_ROWS = frozenset(
    {
        BranchKind.SECTION,
        BranchKind.SUBSECTION,
        BranchKind.SUBSUBSECTION,
        BranchKind.SECTION_STAR,
        BranchKind.SUBSECTION_STAR,
        BranchKind.SUBSUBSECTION_STAR,
    }
)

_EMPHASIS = frozenset(
    {
        BranchKind.BOLD,
        BranchKind.ITALIC,
        BranchKind.UNDERLINE,
        BranchKind.STRIKETHROUGH,
    }
)


# =============================================================================
# Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Leaf:
    """Terminal node built from a single token.

    Attributes:
        kind: Leaf kind
        position: Where the token started
        lexeme: Token text as lexed
        right_pad: Whitespace that followed the token
        content: Kind-specific payload. The text for WORD, the name after
            ``@`` for AT_DELIM, the text between the delimiters for math,
            the block body for RAW_TEX.

    """

    kind: LeafKind
    position: Position
    lexeme: str
    right_pad: str = ""
    content: str = ""


@dataclass(frozen=True, slots=True)
class Branch:
    """Structural node with children.

    Attributes:
        kind: Branch kind
        position: Where the opening token started
        children: Child nodes in source order
        opener: Lexeme of the opening token ("" for paragraphs)
        left_pad: Whitespace after the opening token
        right_pad: Whitespace after the closing token, if any
        reference: Target of a LINK or IMAGE

    """

    kind: BranchKind
    position: Position
    children: tuple[Node, ...] = ()
    opener: str = ""
    left_pad: str = ""
    right_pad: str = ""
    reference: str | None = None


Node: TypeAlias = Leaf | Branch


@dataclass(frozen=True, slots=True)
class MacroDef:
    """A ``macro name params = { body }`` definition.

    Attributes:
        name: Macro name
        params: Parameter names in order
        body: Replacement text, verbatim
        position: Where the definition line started

    """

    name: str
    params: tuple[str, ...]
    body: str
    position: Position


@dataclass(frozen=True, slots=True)
class Document:
    """Result of parsing one source text.

    Attributes:
        children: Top-level nodes
        macros: Macro definitions in source order
        diagnostics: Lexer diagnostics followed by parser diagnostics
        source_file: Optional source path, for messages

    """

    children: tuple[Node, ...]
    macros: tuple[MacroDef, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    source_file: str | None = None

    @property
    def fatal_diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.fatal)

    @property
    def has_fatal(self) -> bool:
        return any(d.fatal for d in self.diagnostics)


# =============================================================================
# Helpers
# =============================================================================


def iter_nodes(nodes: Iterable[Node]) -> Iterator[Node]:
    """Walk nodes depth-first, parents before children."""
    for node in nodes:
        yield node
        match node:
            case Branch(children=children):
                yield from iter_nodes(children)


def find_all(nodes: Iterable[Node], kind: LeafKind | BranchKind) -> list[Node]:
    """All nodes of ``kind`` anywhere under ``nodes``."""
    return [node for node in iter_nodes(nodes) if node.kind is kind]


def text_of(node: Node) -> str:
    """Word and reference text under ``node``, separated by its spacing.

    Example:
        >>> from texmark import parse
        >>> doc = parse("**hello  there**")
        >>> text_of(doc.children[0])
        'hello  there'
    """
    return _spaced_text(node).strip()


def _spaced_text(node: Node) -> str:
    match node:
        case Leaf(kind=LeafKind.AT_DELIM, content=content, right_pad=pad):
            return "@" + content + pad
        case Leaf(content=content, right_pad=pad):
            return content + pad
        case Branch(children=children, left_pad=left, right_pad=right):
            return left + "".join(_spaced_text(child) for child in children) + right
    return ""
