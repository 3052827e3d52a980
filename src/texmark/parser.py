"""Stack-based tree builder producing a typed AST.

Consumes the token list from Lexer and builds frozen Leaf/Branch nodes.
Open structure lives on a NodeStack; anything still open when its
paragraph, row or link ends is demoted back to text, so parsing never
fails and never drops input.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `InlineParsingMixin`: Leaves, emphasis, links and images
- `BlockParsingMixin`: Paragraphs, heading rows, lists, stream structure
- `MacroParsingMixin`: Macro definitions

Thread Safety:
- Parser produces immutable AST (frozen dataclasses)
- Safe to share AST across threads

"""

from __future__ import annotations

from collections.abc import Sequence

from texmark.errors import Diagnostic, ErrorKind
from texmark.lexer import Lexer
from texmark.nodes import Document, MacroDef
from texmark.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    MacroParsingMixin,
    NodeStack,
    TokenNavigationMixin,
)
from texmark.tokens import Token, TokenKind
from texmark.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    BlockParsingMixin,
    MacroParsingMixin,
):
    """Tree builder for texmark markup.

    Usage:
        >>> parser = Parser("# Hello\\n\\nWorld")
        >>> doc = parser.parse()
        >>> [child.kind.name for child in doc.children]
        ['SECTION', 'PARAGRAPH']

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_stack",
        "_macros",
        "_diagnostics",
        "_finished",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Markup source text
            source_file: Optional source file path for messages

        """
        self._source = source
        self._source_file = source_file
        self._tokens: Sequence[Token] = []
        self._tokens_len = 0
        self._pos = 0
        self._current: Token | None = None
        self._stack = NodeStack()
        self._macros: list[MacroDef] = []
        self._diagnostics: list[Diagnostic] = []
        self._finished = False

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Parser diagnostics (lexer diagnostics are on the Document)."""
        return list(self._diagnostics)

    def parse(self, tokens: Sequence[Token] | None = None) -> Document:
        """Parse the source into a Document.

        Args:
            tokens: Pre-lexed tokens to use instead of lexing the source

        Returns:
            Document with the node forest, macro definitions and all
            diagnostics (lexer first, then parser)
        """
        lexer_diagnostics: list[Diagnostic] = []
        if tokens is None:
            lexer = Lexer(self._source, self._source_file)
            tokens = lexer.tokenize()
            lexer_diagnostics = lexer.diagnostics

        self._tokens = tokens
        self._tokens_len = len(tokens)
        self._pos = 0
        self._current = tokens[0] if tokens else None

        while not self._finished and self._current is not None:
            self._parse_token(self._current)

        self._flush()
        logger.debug(
            "Parsed %s: %d top-level nodes, %d macros",
            self._source_file or "<string>",
            len(self._stack.forest),
            len(self._macros),
        )
        return Document(
            children=tuple(self._stack.forest),
            macros=tuple(self._macros),
            diagnostics=(*lexer_diagnostics, *self._diagnostics),
            source_file=self._source_file,
        )

    def _parse_token(self, token: Token) -> None:
        """Dispatch one token; every branch advances at least one token."""
        if token.kind is not TokenKind.SOF:
            self._end_row_before(token)

        match token.kind:
            case kind if kind.is_leaf_content:
                self._parse_leaf(token)
            case TokenKind.MACRO_DEF:
                self._parse_macro_def(token)
            case kind if kind.is_emphasis:
                self._parse_emphasis(token)
            case kind if kind.is_heading:
                self._parse_heading(token)
            case TokenKind.LEFT_BRACKET | TokenKind.BANG_BRACKET:
                self._parse_link_open(token)
            case TokenKind.BRACKET_PAREN:
                self._parse_link_close(token)
            case TokenKind.RIGHT_PAREN:
                self._parse_as_word(token)
            case TokenKind.UL_ITEM | TokenKind.OL_ITEM:
                self._parse_list_item(token)
            case TokenKind.SOF:
                self._parse_sof(token)
            case TokenKind.EMPTY_ROW:
                self._parse_empty_row(token)
            case TokenKind.EOF:
                self._parse_eof(token)
            case _:
                self._report(ErrorKind.UNRECOGNIZED_TOKEN, token)
                self._advance()

    def _flush(self) -> None:
        """Close whatever a stream without EOF left open."""
        self._end_row()
        self._end_paragraph()
        stack = self._stack
        while not stack.is_empty():
            stack.collapse_to(0)
            stack.pop()

    def _report(self, kind: ErrorKind, token: Token) -> None:
        diagnostic = Diagnostic(
            kind=kind,
            position=token.position,
            fatal=True,
            subject=token.kind.name,
        )
        self._diagnostics.append(diagnostic)
        logger.debug("%s: %s", token.position.format(self._source_file), diagnostic.message)
