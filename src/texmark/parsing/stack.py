"""Open-branch stack for tree building.

The parser keeps every branch it has opened but not yet closed on a
stack. Branches are mutable frames while they are open and become frozen
Branch nodes when popped:

    stack = NodeStack()
    stack.push(OpenBranch(BranchKind.PARAGRAPH, pos))
    stack.push(OpenBranch(BranchKind.BOLD, pos, opener="**"))
    stack.attach(word)          # child of BOLD
    stack.pop()                 # BOLD becomes a child of PARAGRAPH
    stack.pop()                 # PARAGRAPH graduates to the forest

Recovery never raises. ``collapse_to()`` discards the frames above a
target by demoting each one to the literal text of its opener followed
by its children, so unmatched markup turns back into words and no input
is lost.

Invariant: every node ends up in exactly one place, either a frame's
children or the forest.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from texmark.location import Position
from texmark.nodes import Branch, BranchKind, Leaf, LeafKind, Node
from texmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class OpenBranch:
    """A branch still being assembled.

    Attributes:
        kind: Branch kind
        position: Where the opening token started
        opener: Lexeme of the opening token ("" when there is none)
        left_pad: Whitespace after the opening token
        children: Nodes collected so far

    """

    kind: BranchKind
    position: Position
    opener: str = ""
    left_pad: str = ""
    children: list[Node] = field(default_factory=list)

    def close(self, right_pad: str = "", reference: str | None = None) -> Branch:
        """Freeze into a Branch node."""
        return Branch(
            kind=self.kind,
            position=self.position,
            children=tuple(self.children),
            opener=self.opener,
            left_pad=self.left_pad,
            right_pad=right_pad,
            reference=reference,
        )

    def demote(self) -> list[Node]:
        """Turn an unclosed branch back into text.

        Returns:
            A WORD leaf spelling the opener (if any) followed by the
            children collected so far.
        """
        if not self.opener:
            return list(self.children)
        word = Leaf(
            kind=LeafKind.WORD,
            position=self.position,
            lexeme=self.opener,
            right_pad=self.left_pad,
            content=self.opener,
        )
        return [word, *self.children]


class NodeStack:
    """Stack of open branches plus the forest of finished top-level nodes.

    Thread Safety:
        Instance is local to one Parser. No shared mutable state.

    """

    __slots__ = ("_frames", "_forest")

    def __init__(self) -> None:
        self._frames: list[OpenBranch] = []
        self._forest: list[Node] = []

    def __len__(self) -> int:
        return len(self._frames)

    def __getitem__(self, index: int) -> OpenBranch:
        return self._frames[index]

    @property
    def forest(self) -> list[Node]:
        return self._forest

    @property
    def top(self) -> OpenBranch | None:
        return self._frames[-1] if self._frames else None

    def is_empty(self) -> bool:
        return not self._frames

    def kinds(self) -> list[BranchKind]:
        """Kinds of the open frames, bottom first (for tests and logging)."""
        return [frame.kind for frame in self._frames]

    # =========================================================================
    # Push / attach / pop
    # =========================================================================

    def push(self, frame: OpenBranch) -> None:
        self._frames.append(frame)

    def attach(self, node: Node) -> None:
        """Add ``node`` to the top frame, or to the forest if none is open."""
        if self._frames:
            self._frames[-1].children.append(node)
        else:
            self._forest.append(node)

    def pop(self, right_pad: str = "", reference: str | None = None) -> Branch:
        """Close the top frame and attach it to its new parent.

        Empty paragraphs are dropped instead of attached.

        Returns:
            The closed Branch.
        """
        branch = self._frames.pop().close(right_pad=right_pad, reference=reference)
        if branch.children or branch.kind is not BranchKind.PARAGRAPH:
            self.attach(branch)
        return branch

    # =========================================================================
    # Search
    # =========================================================================

    def find(self, pred: Callable[[OpenBranch], bool]) -> int | None:
        """Index of the top-most frame matching ``pred``, or None."""
        for index in range(len(self._frames) - 1, -1, -1):
            if pred(self._frames[index]):
                return index
        return None

    def find_kind(self, kind: BranchKind) -> int | None:
        return self.find(lambda frame: frame.kind is kind)

    # =========================================================================
    # Collapse
    # =========================================================================

    def collapse_to(self, index: int) -> None:
        """Demote every frame above ``index`` into the frame at ``index``.

        Frames are removed top first, so each demoted frame's text lands
        after everything collected below it and source order is kept.
        """
        while len(self._frames) > index + 1:
            frame = self._frames.pop()
            logger.debug("Demoting unclosed %s at %s", frame.kind.name, frame.position)
            self._frames[-1].children.extend(frame.demote())

    def _collapse_to_match(self, pred: Callable[[OpenBranch], bool]) -> int | None:
        index = self.find(pred)
        if index is not None:
            self.collapse_to(index)
        return index

    def collapse_to_row(self) -> int | None:
        return self._collapse_to_match(lambda frame: frame.kind.is_row)

    def collapse_to_list_item(self) -> int | None:
        return self._collapse_to_match(lambda frame: frame.kind is BranchKind.LIST_ITEM)

    def collapse_to_list(self) -> int | None:
        return self._collapse_to_match(lambda frame: frame.kind.is_list)

    def collapse_to_link_or_image(self) -> int | None:
        return self._collapse_to_match(lambda frame: frame.kind.is_link_or_image)

    def collapse_to_paragraph(self, position: Position | None = None) -> int:
        """Collapse to the nearest paragraph, creating one at the bottom if needed.

        Args:
            position: Position for a synthetic paragraph; defaults to the
                position of the bottom frame

        Returns:
            Index of the paragraph frame.
        """
        index = self.find_kind(BranchKind.PARAGRAPH)
        if index is None:
            self._insert_paragraph(position)
            index = 0
        self.collapse_to(index)
        return index

    def collapse_to_previous(self) -> int:
        """Demote the top frame into the one below it.

        A synthetic paragraph is created first when the top frame is the
        only one.

        Returns:
            Index of the new top frame.
        """
        if len(self._frames) < 2:
            self._insert_paragraph(None)
            if len(self._frames) == 1:
                return 0
        index = len(self._frames) - 2
        self.collapse_to(index)
        return index

    def _insert_paragraph(self, position: Position | None) -> None:
        if position is None:
            position = self._frames[0].position if self._frames else Position.start()
        self._frames.insert(0, OpenBranch(kind=BranchKind.PARAGRAPH, position=position))
