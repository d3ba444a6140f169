"""Test viewport scroll-follow, resizing and dirty-region tracking."""

from scrollpad.buffer import TextBuffer
from scrollpad.clipboard import Clipboard
from scrollpad.geometry import Rect
from scrollpad.region import Position
from scrollpad.session import EditSession


def create_session(lines, width=80, height=24):
    return EditSession(TextBuffer(lines), clipboard=Clipboard(), width=width, height=height)


def test_moving_below_view_scrolls_minimally():
    session = create_session([str(i) for i in range(50)], height=10)
    for _ in range(10):
        session.move_down()
    assert session.cursor.row == 10
    assert session.viewport.top_row == 1


def test_moving_above_view_scrolls_to_cursor_row():
    session = create_session([str(i) for i in range(50)], height=10)
    session.move_to(30, 0)
    assert session.viewport.top_row == 21
    session.move_to(5, 0)
    assert session.viewport.top_row == 5


def test_horizontal_scroll_follows_cursor():
    session = create_session(["x" * 30], width=10)
    session.move_line_end()
    assert session.cursor == Position(0, 30)
    assert session.viewport.left_column == 21
    session.move_line_start()
    assert session.viewport.left_column == 0


def test_typing_past_right_edge_scrolls():
    session = create_session([""], width=4)
    for ch in "abcd":
        session.insert_rune(ch)
    assert session.viewport.left_column == 1


def test_multiline_insert_scrolls_vertically():
    session = create_session([""], height=3)
    session.insert_text("a\nb\nc\nd")
    assert session.cursor == Position(3, 1)
    assert session.viewport.top_row == 1


def test_resize_clamps_to_one_cell():
    session = create_session(["abc"])
    session.resize(0, -5)
    assert (session.width, session.height) == (1, 1)


def test_resize_keeps_cursor_visible():
    session = create_session([str(i) for i in range(10)], height=10)
    session.move_to(5, 0)
    assert session.viewport.top_row == 0
    session.resize(10, 2)
    assert session.viewport.top_row == 4
    assert session.consume_dirty() == Rect(0, 0, 10, 2)


def test_scroll_marks_whole_surface_dirty():
    session = create_session([str(i) for i in range(50)], width=5, height=3)
    session.move_to(20, 0)
    assert session.dirty.full
    assert session.consume_dirty() == Rect(0, 0, 5, 3)
    assert session.consume_dirty() is None


def test_insert_marks_only_cursor_row():
    session = create_session(["a", "b", "c"], width=5, height=3)
    session.move_to(2, 0)
    session.consume_dirty()
    session.insert_rune("x")
    assert session.consume_dirty() == Rect(0, 2, 5, 1)


def test_split_marks_rows_to_bottom():
    session = create_session(["a", "b", "c", "d"], width=5, height=4)
    session.move_to(1, 1)
    session.consume_dirty()
    session.split_line()
    assert session.consume_dirty() == Rect(0, 1, 5, 3)


def test_moving_with_selection_marks_spanned_rows():
    session = create_session(["a", "b", "c", "d"], width=5, height=4)
    session.start_selection()
    session.consume_dirty()
    session.move_down()
    session.move_down()
    assert session.consume_dirty() == Rect(0, 0, 5, 3)


def test_plain_motion_paints_nothing():
    session = create_session(["abc", "def"], width=5, height=4)
    session.move_right()
    session.move_down()
    assert session.consume_dirty() is None


def test_horizontal_scroll_accounts_for_wide_runes():
    session = create_session(["中文 text"] + [""] * 20, width=4, height=3)
    session.move_to(0, 2)
    assert session.viewport.left_column == 1
    assert session.cursor_cell() == (2, 0)
    session.move_to(0, 0)
    assert session.viewport.left_column == 0
    session.move_to(0, 1)
    assert session.cursor_cell() == (2, 0)
    session.move_to(5, 0)
    assert session.viewport.top_row == 3
    assert session.cursor_cell() == (0, 2)
