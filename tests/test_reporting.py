"""Tests for human-readable diagnostic reports."""

from texmark import lex, parse
from texmark.errors import Diagnostic, ErrorKind
from texmark.location import Position
from texmark.reporting import format_diagnostic, format_diagnostics


class TestFormatDiagnostic:
    """Header, gutter, caret and hints."""

    def test_layout(self) -> None:
        source = "first\nsee $x here\nlast"
        (diagnostic,) = lex(source).diagnostics

        lines = format_diagnostic(diagnostic, source, "n.tm").split("\n")

        assert lines[0] == (
            "n.tm:2:5: UnclosedSequence: expected a '$' to close the sequence "
            "'$' started here, but found none"
        )
        assert lines[1:5] == [
            "1 | first",
            "2 | see $x here",
            "  |     ^",
            "3 | last",
        ]
        assert lines[5] == "Hint: If you did not mean to insert a math delimiter,"
        assert all(line.startswith("Hint: ") for line in lines[5:])

    def test_first_line_has_no_previous(self) -> None:
        source = "$x"
        (diagnostic,) = lex(source).diagnostics
        lines = format_diagnostic(diagnostic, source).split("\n")
        assert lines[0].startswith("1:1: UnclosedSequence")
        assert lines[1:3] == ["1 | $x", "  | ^"]

    def test_gutter_width_follows_last_row(self) -> None:
        source = "\n".join(["line"] * 9 + ["$x", "tail"])
        (diagnostic,) = lex(source).diagnostics
        lines = format_diagnostic(diagnostic, source).split("\n")
        assert lines[1:5] == [" 9 | line", "10 | $x", "   | ^", "11 | tail"]

    def test_empty_context_line(self) -> None:
        source = "a\n\n$x"
        (diagnostic,) = lex(source).diagnostics
        lines = format_diagnostic(diagnostic, source).split("\n")
        assert lines[1:3] == ["2 |", "3 | $x"]

    def test_without_hint(self) -> None:
        diagnostic = Diagnostic(
            kind=ErrorKind.UNRECOGNIZED_TOKEN,
            position=Position.start(),
            fatal=True,
            subject="SOF",
        )
        report = format_diagnostic(diagnostic, "x")
        assert report == "1:1: UnrecognizedToken: unrecognized token SOF\n1 | x\n  | ^"


class TestFormatDiagnostics:
    """Several diagnostics at once."""

    def test_joined_with_blank_line(self) -> None:
        source = "a\x00 $x"
        doc = parse(source)
        report = format_diagnostics(doc.diagnostics, source)
        assert report.count("\n\n") == 1
        assert "UnrecognizedChar" in report
        assert "UnclosedSequence" in report

    def test_empty(self) -> None:
        assert format_diagnostics([], "x") == ""
