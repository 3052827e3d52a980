"""Tests for the character cursor."""

from texmark.lexer.charsets import ESCAPABLE
from texmark.lexer.cursor import Cursor
from texmark.location import Position


class TestInspection:
    """Reading characters without moving."""

    def test_cur_char_at_end_is_empty(self) -> None:
        cur = Cursor("a")
        cur.advance()
        assert cur.cur_char() == ""
        assert not cur.has_source_left()

    def test_empty_source(self) -> None:
        cur = Cursor("")
        assert cur.cur_char() == ""
        assert not cur.has_source_left()
        assert cur.position == Position.start()

    def test_lookahead_is_clipped_at_end(self) -> None:
        cur = Cursor("ab")
        assert cur.lookahead() == "b"
        assert cur.lookahead(5) == "b"

    def test_lookback(self) -> None:
        cur = Cursor("abc")
        cur.advance(2)
        assert cur.lookback() == "b"
        assert cur.lookback(2) == "ab"
        assert cur.lookback(10) == "ab"

    def test_rest_of_line(self) -> None:
        cur = Cursor("ab\ncd")
        assert cur.rest_of_line() == "ab"
        cur.advance(3)
        assert cur.rest_of_line() == "cd"

    def test_start_of_line(self) -> None:
        cur = Cursor("a\nb")
        assert cur.is_at_start_of_line()
        cur.advance()
        assert not cur.is_at_start_of_line()
        cur.advance()
        assert cur.is_at_start_of_line()


class TestBlankLine:
    """Detection of a newline that opens an empty line."""

    def test_double_newline(self) -> None:
        cur = Cursor("a\n\nb")
        cur.advance()
        assert cur.at_blank_line()

    def test_whitespace_only_line(self) -> None:
        cur = Cursor("a\n  \t\nb")
        cur.advance()
        assert cur.at_blank_line()

    def test_single_newline(self) -> None:
        cur = Cursor("a\nb")
        cur.advance()
        assert not cur.at_blank_line()

    def test_trailing_newline(self) -> None:
        cur = Cursor("a\n")
        cur.advance()
        assert not cur.at_blank_line()

    def test_not_on_newline(self) -> None:
        assert not Cursor(" \n\n").at_blank_line()


class TestMovement:
    """advance() and the predicate-driven variants."""

    def test_advance_tracks_rows_and_columns(self) -> None:
        cur = Cursor("ab\ncd")
        cur.advance(4)
        assert cur.position == Position(offset=4, row=2, col=2)

    def test_advance_past_end_is_noop(self) -> None:
        cur = Cursor("ab")
        cur.advance(10)
        assert cur.offset == 2
        assert cur.position == Position(offset=2, row=1, col=3)

    def test_advance_while_stops_on_last_char(self) -> None:
        cur = Cursor("aaa")
        cur.advance_while(lambda c: c.lookahead() == "a")
        assert cur.offset == 2

    def test_advance_until(self) -> None:
        cur = Cursor("abc;d")
        cur.advance_until(lambda c: c.lookahead() == ";")
        assert cur.cur_char() == "c"

    def test_advance_until_without_match_stops_on_last_char(self) -> None:
        cur = Cursor("abc")
        cur.advance_until(lambda c: c.lookahead() == ";")
        assert cur.cur_char() == "c"

    def test_advance_while_escaping_steps_over_pairs(self) -> None:
        cur = Cursor(r"a\*b c")
        cur.mark_position()
        cur.advance_while_escaping(lambda c: c.lookahead() == " ", ESCAPABLE)
        assert cur.capture_marked_substring() == r"a\*b"

    def test_advance_while_escaping_stops_before_plain_backslash(self) -> None:
        cur = Cursor(r"ab\q")
        cur.advance_while_escaping(lambda c: False, ESCAPABLE)
        assert cur.cur_char() == "b"


class TestCapture:
    """Marked substrings and right pads."""

    def test_capture_is_inclusive(self) -> None:
        cur = Cursor("ab cd")
        cur.mark_position()
        cur.advance()
        assert cur.capture_marked_substring() == "ab"

    def test_right_pad_consumes_spaces(self) -> None:
        cur = Cursor("ab cd")
        cur.advance()
        assert cur.capture_right_pad() == " "
        assert cur.cur_char() == "c"

    def test_right_pad_keeps_single_newline_and_indent(self) -> None:
        cur = Cursor("a \n  b")
        assert cur.capture_right_pad() == " \n  "
        assert cur.cur_char() == "b"

    def test_right_pad_stops_before_blank_line(self) -> None:
        cur = Cursor("a  \n\nb")
        assert cur.capture_right_pad() == "  "
        assert cur.cur_char() == "\n"
        assert cur.at_blank_line()

    def test_right_pad_at_end(self) -> None:
        cur = Cursor("a")
        assert cur.capture_right_pad() == ""
        assert not cur.has_source_left()


class TestBacktracking:
    """Snapshots restore the full position."""

    def test_backtrack_restores_row_and_col(self) -> None:
        cur = Cursor("ab\ncd")
        cur.advance()
        snap = cur.snapshot()
        cur.advance(3)
        assert cur.position.row == 2
        cur.backtrack_to_snapshot(snap)
        assert cur.position == Position(offset=1, row=1, col=2)
        assert cur.cur_char() == "b"
