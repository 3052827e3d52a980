"""Block structure for texmark parser: paragraphs, heading rows and lists.

Stack states over a document:

    []  ->  [PARAGRAPH]  ->  [PARAGRAPH, emphasis...]
        ->  [PARAGRAPH, ITEMIZE, LIST_ITEM, ...]
        ->  [ROW]  ->  ...  ->  []

A paragraph or a heading row always sits at the bottom of the stack.
Blank lines end the paragraph; a heading row ends at the first token on
a later source line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texmark.errors import ErrorKind
from texmark.nodes import BranchKind
from texmark.parsing.stack import OpenBranch
from texmark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from texmark.location import Position
    from texmark.parsing.stack import NodeStack

HEADING_KINDS: dict[TokenKind, BranchKind] = {
    TokenKind.HASH: BranchKind.SECTION,
    TokenKind.DOUBLE_HASH: BranchKind.SUBSECTION,
    TokenKind.TRIPLE_HASH: BranchKind.SUBSUBSECTION,
    TokenKind.HASH_STAR: BranchKind.SECTION_STAR,
    TokenKind.DOUBLE_HASH_STAR: BranchKind.SUBSECTION_STAR,
    TokenKind.TRIPLE_HASH_STAR: BranchKind.SUBSUBSECTION_STAR,
}

LIST_KINDS: dict[TokenKind, BranchKind] = {
    TokenKind.UL_ITEM: BranchKind.ITEMIZE,
    TokenKind.OL_ITEM: BranchKind.ENUMERATE,
}


class BlockParsingMixin:
    """Mixin for paragraph, heading row and list structure.

    Required Host Attributes:
        - _stack: NodeStack
        - _pos: int
        - _finished: bool

    Required Host Methods:
        - _report()
        - _peek()
        - _advance()

    """

    _stack: NodeStack
    _pos: int
    _finished: bool

    # =========================================================================
    # Paragraphs
    # =========================================================================

    def _start_paragraph(self, position: Position) -> None:
        self._stack.push(OpenBranch(kind=BranchKind.PARAGRAPH, position=position))

    def _ensure_paragraph(self, token: Token) -> None:
        """Open a paragraph if nothing is open (hand-built token streams)."""
        if self._stack.is_empty():
            self._start_paragraph(token.position)

    def _end_paragraph(self) -> None:
        """Close open lists, demote leftovers and pop the paragraph."""
        if self._stack.is_empty():
            return
        self._end_lists()
        self._stack.collapse_to_paragraph()
        self._stack.pop()

    # =========================================================================
    # Heading rows
    # =========================================================================

    def _end_row(self) -> bool:
        """Close the open heading row, if any.

        Returns:
            True if a row was closed.
        """
        if self._stack.collapse_to_row() is None:
            return False
        self._stack.pop()
        return True

    def _row_ends_before(self, token: Token) -> bool:
        """True when a heading row is open and ``token`` starts on a later line."""
        index = self._stack.find(lambda frame: frame.kind.is_row)
        return index is not None and token.row > self._stack[index].position.row

    def _end_row_before(self, token: Token) -> None:
        """End the open row when ``token`` starts on a later line."""
        if self._row_ends_before(token):
            self._end_row()
            self._start_paragraph(token.position)

    def _parse_heading(self, token: Token) -> None:
        self._end_row()
        self._end_paragraph()
        self._stack.push(
            OpenBranch(
                kind=HEADING_KINDS[token.kind],
                position=token.position,
                opener=token.lexeme,
                left_pad=token.right_pad,
            )
        )
        self._advance()

    # =========================================================================
    # Lists
    # =========================================================================

    def _close_list_at(self, index: int) -> None:
        """Properly close the list at ``index`` and its current item."""
        stack = self._stack
        if len(stack) > index + 1:
            stack.collapse_to(index + 1)
            stack.pop()
        stack.collapse_to(index)
        stack.pop()

    def _end_lists(self) -> None:
        while (index := self._stack.find(lambda frame: frame.kind.is_list)) is not None:
            self._close_list_at(index)

    def _parse_list_item(self, token: Token) -> None:
        self._ensure_paragraph(token)
        stack = self._stack
        list_kind = LIST_KINDS[token.kind]
        index = stack.find_kind(list_kind)

        if index is None:
            stack.push(OpenBranch(kind=list_kind, position=token.position))
        else:
            # Lists nested inside the current item end with it
            while (inner := stack.find(lambda frame: frame.kind.is_list)) != index:
                self._close_list_at(inner)
            if len(stack) > index + 1:
                stack.collapse_to(index + 1)
                stack.pop()

        stack.push(
            OpenBranch(
                kind=BranchKind.LIST_ITEM,
                position=token.position,
                opener=token.lexeme,
                left_pad=token.right_pad,
            )
        )
        self._advance()

    # =========================================================================
    # Stream structure
    # =========================================================================

    def _parse_sof(self, token: Token) -> None:
        if self._pos != 0:
            self._report(ErrorKind.UNRECOGNIZED_TOKEN, token)
            self._advance()
            return
        self._start_paragraph(token.position)
        self._advance()

    def _parse_empty_row(self, token: Token) -> None:
        self._end_row()
        self._end_paragraph()
        following = self._peek(1)
        self._start_paragraph(following.position if following is not None else token.position)
        self._advance()

    def _parse_eof(self, token: Token) -> None:
        self._end_row()
        self._end_paragraph()
        self._finished = True
        self._advance()
