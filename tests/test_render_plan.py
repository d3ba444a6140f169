"""Test the cell plan produced for a screen rectangle."""

import pytest

from scrollpad.buffer import TextBuffer
from scrollpad.geometry import Rect, Viewport
from scrollpad.region import Position, point_in_region
from scrollpad.view import BLANK, column_at_cell, cursor_cell, display_width, plan, rune_width


def texts(rows):
    return [[cell.text for cell in row] for row in rows]


def selected(rows):
    return [[cell.selected for cell in row] for row in rows]


@pytest.mark.parametrize("rune, width", [
    ("a", 1),
    ("中", 2),
    ("\u0301", 0),
    ("\x01", 1),
])
def test_rune_width(rune, width):
    assert rune_width(rune) == width


def test_display_width():
    assert display_width("a中b") == 4


def test_plan_pads_and_blanks_past_end():
    rows = plan(TextBuffer(["ab", "c"]), Viewport(), None, Rect(0, 0, 4, 3))
    assert texts(rows) == [
        ["a", "b", " ", " "],
        ["c", " ", " ", " "],
        [" ", " ", " ", " "],
    ]
    assert rows[2] == [BLANK] * 4


def test_plan_applies_viewport_offset():
    rows = plan(TextBuffer(["abc", "defg"]), Viewport(top_row=1, left_column=1), None, Rect(0, 0, 4, 1))
    assert texts(rows) == [["e", "f", "g", " "]]


def test_wide_rune_takes_two_cells():
    rows = plan(TextBuffer(["a中b"]), Viewport(), None, Rect(0, 0, 3, 1))
    assert texts(rows) == [["a", "中", ""]]
    assert rows[0][2].is_continuation


def test_wide_rune_that_does_not_fit_is_left_out():
    rows = plan(TextBuffer(["a中"]), Viewport(), None, Rect(0, 0, 2, 1))
    assert texts(rows) == [["a", " "]]


def test_combining_mark_joins_previous_cell():
    rows = plan(TextBuffer(["e\u0301x"]), Viewport(), None, Rect(0, 0, 3, 1))
    assert texts(rows) == [["e\u0301", "x", " "]]


def test_selection_is_inclusive():
    buf = TextBuffer(["abcd"])
    forward = plan(buf, Viewport(), (Position(0, 1), Position(0, 2)), Rect(0, 0, 4, 1))
    backward = plan(buf, Viewport(), (Position(0, 2), Position(0, 1)), Rect(0, 0, 4, 1))
    assert selected(forward) == [[False, True, True, False]]
    assert forward == backward


def test_multiline_selection_covers_line_ends():
    rows = plan(TextBuffer(["ab", "cd"]), Viewport(), (Position(0, 1), Position(1, 0)), Rect(0, 0, 3, 2))
    assert selected(rows) == [
        [False, True, True],
        [True, False, False],
    ]


def test_selection_mask_agrees_with_point_in_region():
    buf = TextBuffer(["abc", "defg", "hi"])
    anchor, cursor = Position(2, 1), Position(0, 2)
    rows = plan(buf, Viewport(), (anchor, cursor), Rect(0, 0, 5, 3))
    for row, cells in enumerate(rows):
        for column, cell in enumerate(cells):
            assert cell.selected == point_in_region(Position(row, column), anchor, cursor)


def test_selection_uses_buffer_coordinates_when_scrolled():
    buf = TextBuffer(["zero", "one", "two"])
    rows = plan(buf, Viewport(top_row=1, left_column=1), (Position(1, 1), Position(1, 2)), Rect(0, 0, 3, 2))
    assert selected(rows) == [
        [True, True, False],
        [False, False, False],
    ]


def test_partial_rect():
    rows = plan(TextBuffer(["abc", "def"]), Viewport(), None, Rect(1, 1, 2, 1))
    assert texts(rows) == [["e", "f"]]


def test_partial_rect_starting_inside_wide_rune():
    rows = plan(TextBuffer(["中x"]), Viewport(), None, Rect(1, 0, 2, 1))
    assert texts(rows) == [[" ", "x"]]


def test_empty_rect():
    assert plan(TextBuffer(["abc"]), Viewport(), None, Rect(0, 0, 0, 5)) == []


def test_cursor_cell_counts_display_width():
    buf = TextBuffer(["中a", "x"])
    assert cursor_cell(buf, Viewport(), Position(0, 1)) == (2, 0)
    assert cursor_cell(buf, Viewport(top_row=1), Position(1, 1)) == (1, 0)


@pytest.mark.parametrize("x, column", [(0, 0), (1, 0), (2, 1), (3, 3), (4, 3), (9, 3)])
def test_column_at_cell(x, column):
    # "中" fills cells 0-1, "e" plus its combining acute fills cell 2
    assert column_at_cell("\u4e2de\u0301", 0, x) == column


def test_column_at_cell_respects_left_column():
    assert column_at_cell("abcdef", 2, 1) == 3
    assert column_at_cell("ab", 5, 0) == 5
