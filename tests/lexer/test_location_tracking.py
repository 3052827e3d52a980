"""Tests for accurate source location tracking in the lexer.

Token positions feed diagnostics and the gutter excerpts in reports.
These tests verify that rows, columns and offsets are tracked through
newlines, pads, backtracking and multi-line tokens.
"""

from texmark.lexer import Lexer
from texmark.location import Position
from texmark.tokens import TokenKind


class TestSingleLineLocations:
    """Test location tracking on one line."""

    def test_first_token(self) -> None:
        token = Lexer("# Heading").tokenize()[1]
        assert token.kind is TokenKind.HASH
        assert token.position == Position(offset=0, row=1, col=1)

    def test_after_pad(self) -> None:
        tokens = Lexer("one  two").tokenize()
        assert tokens[2].position == Position(offset=5, row=1, col=6)

    def test_sof_position(self) -> None:
        assert Lexer("text").tokenize()[0].position == Position.start()


class TestMultiLineLocations:
    """Test location tracking across lines."""

    def test_rows_and_columns(self) -> None:
        tokens = Lexer("a\nbb c\n\nd").tokenize()
        positions = [(t.kind, t.row, t.col) for t in tokens]
        assert positions == [
            (TokenKind.SOF, 1, 1),
            (TokenKind.WORD, 1, 1),
            (TokenKind.WORD, 2, 1),
            (TokenKind.WORD, 2, 4),
            (TokenKind.EMPTY_ROW, 2, 5),
            (TokenKind.WORD, 4, 1),
            (TokenKind.EOF, 4, 2),
        ]

    def test_after_heredoc(self) -> None:
        tokens = Lexer("TEX <<< E\nx\nE\nnext").tokenize()
        assert tokens[1].kind is TokenKind.HEREDOC
        assert tokens[2].lexeme == "next"
        assert (tokens[2].row, tokens[2].col) == (4, 1)

    def test_after_display_math(self) -> None:
        tokens = Lexer("$$\nx\n$$ y").tokenize()
        assert tokens[2].lexeme == "y"
        assert (tokens[2].row, tokens[2].col) == (3, 4)

    def test_indented_continuation(self) -> None:
        tokens = Lexer("- a\n  b").tokenize()
        assert tokens[3].lexeme == "b"
        assert (tokens[3].row, tokens[3].col) == (2, 3)


class TestDiagnosticLocations:
    """Diagnostics point at the offending character."""

    def test_control_char(self) -> None:
        lexer = Lexer("ok\nab\x00")
        lexer.tokenize()
        (diagnostic,) = lexer.diagnostics
        assert diagnostic.position == Position(offset=5, row=2, col=3)

    def test_unclosed_math_points_at_opener(self) -> None:
        lexer = Lexer("one\ntwo $x")
        lexer.tokenize()
        (diagnostic,) = lexer.diagnostics
        assert (diagnostic.position.row, diagnostic.position.col) == (2, 5)
