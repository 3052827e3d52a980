"""Tests for the LaTeX output buffer."""

from texmark.stringbuilder import StringBuilder


class TestStringBuilder:
    def test_empty(self) -> None:
        assert StringBuilder().build() == ""

    def test_append_skips_empty(self) -> None:
        sb = StringBuilder().append("").append("a")
        assert sb.build() == "a"

    def test_command_arguments(self) -> None:
        assert StringBuilder().command("href", "u", "t").build() == "\\href{u}{t}"

    def test_command_without_arguments(self) -> None:
        assert StringBuilder().command("centering").build() == "\\centering"

    def test_environment_on_own_lines(self) -> None:
        sb = StringBuilder().append("text")
        sb.begin("figure", "h").append_line("body").end("figure")
        assert sb.build() == "text\n\\begin{figure}[h]\nbody\n\\end{figure}\n"

    def test_ensure_newline_does_not_double(self) -> None:
        sb = StringBuilder().append_line("a").ensure_newline()
        assert sb.build() == "a\n"

    def test_ensure_newline_at_start_is_noop(self) -> None:
        assert StringBuilder().ensure_newline().build() == ""
