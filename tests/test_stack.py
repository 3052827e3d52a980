"""Tests for the open-branch stack used by the parser."""

from texmark.location import Position
from texmark.nodes import Branch, BranchKind, Leaf, LeafKind
from texmark.parsing.stack import NodeStack, OpenBranch

POS = Position.start()


def _word(text: str, pad: str = "") -> Leaf:
    return Leaf(kind=LeafKind.WORD, position=POS, lexeme=text, right_pad=pad, content=text)


def _frame(kind: BranchKind, opener: str = "", left_pad: str = "") -> OpenBranch:
    return OpenBranch(kind=kind, position=POS, opener=opener, left_pad=left_pad)


class TestOpenBranch:
    """Freezing and demoting frames."""

    def test_close(self) -> None:
        frame = _frame(BranchKind.LINK, "[")
        frame.children.append(_word("x"))
        branch = frame.close(right_pad=" ", reference="url")
        assert branch == Branch(
            kind=BranchKind.LINK,
            position=POS,
            children=(_word("x"),),
            opener="[",
            right_pad=" ",
            reference="url",
        )

    def test_demote_spells_opener(self) -> None:
        frame = _frame(BranchKind.BOLD, "**", left_pad=" ")
        frame.children.append(_word("x"))
        opener, child = frame.demote()
        assert (opener.lexeme, opener.right_pad, opener.content) == ("**", " ", "**")
        assert child == _word("x")

    def test_demote_without_opener(self) -> None:
        frame = _frame(BranchKind.PARAGRAPH)
        frame.children.append(_word("x"))
        assert frame.demote() == [_word("x")]


class TestPushPop:
    """Attaching nodes and graduating branches."""

    def test_pop_into_forest(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.attach(_word("a"))
        stack.pop()
        assert stack.is_empty()
        assert [node.kind for node in stack.forest] == [BranchKind.PARAGRAPH]

    def test_pop_into_parent(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.BOLD, "**"))
        stack.attach(_word("a"))
        bold = stack.pop(right_pad=" ")
        assert stack.top.children == [bold]
        assert bold.right_pad == " "

    def test_empty_paragraph_dropped(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.pop()
        assert stack.forest == []

    def test_attach_without_frames_goes_to_forest(self) -> None:
        stack = NodeStack()
        stack.attach(_word("a"))
        assert stack.forest == [_word("a")]


class TestSearch:
    """find() returns the top-most match."""

    def test_find_top_most(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.ITALIC, "*"))
        stack.push(_frame(BranchKind.BOLD, "**"))
        stack.push(_frame(BranchKind.ITALIC, "*"))
        assert stack.find_kind(BranchKind.ITALIC) == 3
        assert stack.find(lambda frame: frame.kind is BranchKind.BOLD) == 2
        assert stack.find_kind(BranchKind.LINK) is None

    def test_kinds(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.LINK, "["))
        assert stack.kinds() == [BranchKind.PARAGRAPH, BranchKind.LINK]
        assert len(stack) == 2
        assert stack[1].kind is BranchKind.LINK


class TestCollapse:
    """Demoting frames back to text."""

    def test_collapse_keeps_source_order(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.attach(_word("a"))
        stack.push(_frame(BranchKind.BOLD, "**"))
        stack.attach(_word("b"))
        stack.push(_frame(BranchKind.ITALIC, "*"))
        stack.attach(_word("c"))
        stack.collapse_to(0)
        assert stack.kinds() == [BranchKind.PARAGRAPH]
        assert [leaf.lexeme for leaf in stack.top.children] == ["a", "**", "b", "*", "c"]

    def test_collapse_to_link_or_image(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.IMAGE, "!["))
        stack.push(_frame(BranchKind.BOLD, "**"))
        assert stack.collapse_to_link_or_image() == 1
        assert stack.kinds() == [BranchKind.PARAGRAPH, BranchKind.IMAGE]

    def test_collapse_to_missing_kind(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.BOLD, "**"))
        assert stack.collapse_to_row() is None
        assert stack.collapse_to_list() is None
        assert len(stack) == 2

    def test_collapse_to_list_item(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.ITEMIZE))
        stack.push(_frame(BranchKind.LIST_ITEM, "-"))
        stack.push(_frame(BranchKind.ITALIC, "*"))
        assert stack.collapse_to_list_item() == 2
        assert stack.top.children[0].lexeme == "*"

    def test_collapse_to_paragraph_inserts_one(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.BOLD, "**"))
        stack.attach(_word("x"))
        assert stack.collapse_to_paragraph() == 0
        assert stack.kinds() == [BranchKind.PARAGRAPH]
        assert [leaf.lexeme for leaf in stack.top.children] == ["**", "x"]

    def test_collapse_to_previous(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.PARAGRAPH))
        stack.push(_frame(BranchKind.LINK, "["))
        stack.attach(_word("x"))
        assert stack.collapse_to_previous() == 0
        assert [leaf.lexeme for leaf in stack.top.children] == ["[", "x"]

    def test_collapse_to_previous_single_frame(self) -> None:
        stack = NodeStack()
        stack.push(_frame(BranchKind.LINK, "["))
        assert stack.collapse_to_previous() == 0
        assert stack.kinds() == [BranchKind.PARAGRAPH]
        assert stack.top.children[0].lexeme == "["

    def test_collapse_to_previous_empty(self) -> None:
        stack = NodeStack()
        assert stack.collapse_to_previous() == 0
        assert stack.kinds() == [BranchKind.PARAGRAPH]
