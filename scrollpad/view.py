"""Maps buffer, viewport and selection to the cells of a screen rectangle."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import Optional

from wcwidth import wcwidth

from .buffer import TextBuffer
from .geometry import Rect, Viewport
from .region import Position, point_in_region


def rune_width(rune: str) -> int:
    """Return the number of cells a rune occupies: 0, 1 or 2.

    Combining marks take no cell; non-printable runes count as one.
    """
    if unicodedata.combining(rune):
        return 0
    w = wcwidth(rune)
    if w < 0:
        return 1
    return min(w, 2)


def display_width(text: str) -> int:
    return sum(rune_width(ch) for ch in text)


@dataclass(frozen=True)
class Cell:
    """One screen cell.

    ``text`` is empty for the right half of a wide rune, and may carry
    trailing combining marks after its base rune.
    """
    text: str = " "
    selected: bool = False

    @property
    def is_continuation(self) -> bool:
        return self.text == ""


BLANK = Cell()


def _layout_line(line: str, row: int, left_column: int, width: int,
                 selection: Optional[tuple[Position, Position]]) -> list[Cell]:
    """Lay out one buffer line from ``left_column`` across ``width`` cells."""

    def selected(column: int) -> bool:
        if selection is None:
            return False
        return point_in_region(Position(row, column), *selection)

    cells: list[Cell] = []
    last_base: Optional[int] = None
    column = left_column
    while column < len(line):
        rune = line[column]
        w = rune_width(rune)
        if w == 0:
            # Combining mark rides on the previous rune's cell
            if last_base is not None:
                base = cells[last_base]
                cells[last_base] = Cell(base.text + rune, base.selected)
            column += 1
            continue
        if len(cells) + w > width:
            break
        last_base = len(cells)
        sel = selected(column)
        cells.append(Cell(rune, sel))
        if w == 2:
            cells.append(Cell("", sel))
        column += 1

    # Padding cells map to the columns past the last laid-out rune
    pad_column = column
    while len(cells) < width:
        cells.append(Cell(" ", selected(pad_column)))
        pad_column += 1
    return cells


def plan(buffer: TextBuffer, viewport: Viewport, selection: Optional[tuple[Position, Position]],
         rect: Rect) -> list[list[Cell]]:
    """Return the cells to paint for ``rect``, one list per screen row.

    Screen row ``r`` shows buffer row ``top_row + r`` starting at buffer
    column ``left_column``. ``selection`` is ``(anchor, cursor)`` or None;
    cells within it, both ends inclusive, are marked selected. Rows past
    the end of the document are blank. A rune that would not fit in the
    remaining width is left out rather than cut in half.
    """
    rows: list[list[Cell]] = []
    if rect.is_empty():
        return rows
    for screen_row in range(rect.y, rect.bottom):
        row = viewport.top_row + screen_row
        if row >= buffer.count:
            rows.append([BLANK] * rect.width)
            continue
        cells = _layout_line(buffer.get_line(row), row, viewport.left_column, rect.right, selection)
        cells = cells[rect.x:rect.right]
        if cells and cells[0].is_continuation:
            # Region starts inside a wide rune
            cells[0] = Cell(" ", cells[0].selected)
        rows.append(cells)
    return rows


def cursor_cell(buffer: TextBuffer, viewport: Viewport, cursor: Position) -> tuple[int, int]:
    """Screen ``(col, row)`` of the caret, accounting for wide runes."""
    line = buffer.get_line(cursor.row)
    col = display_width(line[viewport.left_column:cursor.column])
    return col, cursor.row - viewport.top_row


def column_at_cell(line: str, left_column: int, x: int) -> int:
    """Buffer column of the rune drawn at screen cell ``x``.

    The right half of a wide rune maps to the rune itself, and cells past
    the end of the line map to the end of the line.
    """
    used = 0
    for column in range(left_column, len(line)):
        w = rune_width(line[column])
        if used + w > x:
            return column
        used += w
    return max(left_column, len(line))
