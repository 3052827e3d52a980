"""Tests for JSON serialization of documents and tokens."""

import json

import pytest

from texmark import parse
from texmark.lexer import Lexer
from texmark.location import Position
from texmark.nodes import Leaf, LeafKind
from texmark.serialization import (
    from_dict,
    from_json,
    to_dict,
    to_json,
    tokens_from_json,
    tokens_to_json,
)

SOURCE = """macro norm x = { \\lVert x \\rVert }
# Intro

Some **bold** and *it* text with $x^2$, see @fig and [a link](http://x.org).

- one
- two

![caption](img.png)

TEX <<< END
\\newpage
END
unclosed $math
"""


class TestRoundTrip:
    """Documents survive to_json/from_json."""

    def test_document(self) -> None:
        doc = parse(SOURCE, source_file="notes.tm")
        assert from_json(to_json(doc)) == doc

    def test_diagnostics_included(self) -> None:
        doc = parse(SOURCE)
        restored = from_json(to_json(doc))
        assert restored.diagnostics == doc.diagnostics
        assert len(restored.diagnostics) == 1

    def test_tokens(self) -> None:
        tokens = Lexer(SOURCE).tokenize()
        assert tokens_from_json(tokens_to_json(tokens)) == tokens

    def test_deterministic(self) -> None:
        assert to_json(parse(SOURCE)) == to_json(parse(SOURCE))


class TestDictShape:
    """Layout of serialized values."""

    def test_type_discriminator_and_enum_names(self) -> None:
        leaf = Leaf(kind=LeafKind.WORD, position=Position.start(), lexeme="a", content="a")
        data = to_dict(leaf)
        assert data["_type"] == "Leaf"
        assert data["kind"] == "WORD"
        assert data["position"] == {"_type": "Position", "offset": 0, "row": 1, "col": 1}

    def test_tokens_json_is_array(self) -> None:
        data = json.loads(tokens_to_json(Lexer("*a*").tokenize()))
        assert [item["kind"] for item in data] == ["SOF", "STAR", "WORD", "STAR", "EOF"]

    def test_indent(self) -> None:
        assert "\n" in to_json(parse("a"), indent=2)


class TestErrors:
    """Malformed input is rejected."""

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"kind": "WORD"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown type"):
            from_dict({"_type": "Table"})

    def test_from_json_requires_document(self) -> None:
        leaf = Leaf(kind=LeafKind.WORD, position=Position.start(), lexeme="a")
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps(to_dict(leaf)))
