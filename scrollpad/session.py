"""Editing state and commands for the multi-line text editor.

An EditSession owns a TextBuffer together with the caret, the viewport,
the optional selection anchor and the transient state of the Emacs-style
commands (desired column, kill accumulation). Every command runs through
``execute``, which keeps the caret inside the viewport afterwards and
records which part of the screen needs repainting.

Commands never fail on valid input. Positions, rows and columns that
fall outside the document are clamped to the nearest valid value, and
commands at a document boundary do nothing.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Dict, Optional, Union

from . import commands as cmd
from .buffer import TextBuffer, split_lines
from .clipboard import Clipboard, get_clipboard
from .constants import EditorConstants
from .geometry import DirtyRegion, Rect, Viewport
from .region import Position, region_bounds
from .view import Cell, cursor_cell, plan, rune_width
from .words import word_backward, word_forward

logger = logging.getLogger(__name__)


class EditSession:
    """Caret, viewport, selection and kill state over one TextBuffer."""

    def __init__(self, buffer: Optional[TextBuffer] = None, clipboard: Optional[Clipboard] = None,
                 width: int = EditorConstants.DEFAULT_WIDTH, height: int = EditorConstants.DEFAULT_HEIGHT,
                 read_only: bool = False):
        self.buffer = buffer if buffer is not None else TextBuffer()
        # Shared with every other widget unless one is injected
        self.clipboard = clipboard if clipboard is not None else get_clipboard()
        self.width = max(1, width)
        self.height = max(1, height)
        self.read_only = read_only
        self.cursor = Position()
        self.viewport = Viewport()
        self.anchor: Optional[Position] = None
        self.desired_column: Optional[int] = None
        self.last_was_kill = False
        self.dirty = DirtyRegion()
        self._handlers: Dict[type, Callable] = {
            cmd.MoveLeft: self._move_left,
            cmd.MoveRight: self._move_right,
            cmd.MoveUp: self._move_up,
            cmd.MoveDown: self._move_down,
            cmd.PageUp: self._page_up,
            cmd.PageDown: self._page_down,
            cmd.MoveLineStart: self._move_line_start,
            cmd.MoveLineEnd: self._move_line_end,
            cmd.MoveWordForward: self._move_word_forward,
            cmd.MoveWordBackward: self._move_word_backward,
            cmd.MoveTo: self._move_to,
            cmd.InsertRune: self._insert_rune,
            cmd.InsertText: self._insert_text,
            cmd.DeleteBackward: self._delete_backward,
            cmd.DeleteForward: self._delete_forward,
            cmd.SplitLine: self._split_line,
            cmd.StartSelection: self._start_selection,
            cmd.CopyRegion: self._copy_region,
            cmd.KillRegion: self._kill_region,
            cmd.KillToLineEnd: self._kill_to_line_end,
            cmd.Yank: self._yank,
        }

    # --- State queries ---

    @property
    def row(self) -> int:
        return self.cursor.row

    @property
    def column(self) -> int:
        return self.cursor.column

    @property
    def selecting(self) -> bool:
        return self.anchor is not None

    @property
    def selection(self) -> Optional[tuple[Position, Position]]:
        """``(anchor, cursor)`` while a selection is active, else None."""
        if self.anchor is None:
            return None
        return self.clamp(self.anchor), self.cursor

    @property
    def screen_rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def text(self) -> str:
        return self.buffer.serialize()

    @text.setter
    def text(self, content: str) -> None:
        self.load_text(content)

    def current_line(self) -> str:
        return self.buffer.get_line(self.cursor.row)

    def clamp(self, position: Position) -> Position:
        """Nearest valid caret position to ``position``."""
        row = min(max(0, position.row), self.buffer.count - 1)
        column = min(max(0, position.column), len(self.buffer.get_line(row)))
        return Position(row, column)

    # --- Loading ---

    def _reset(self) -> None:
        self.cursor = Position()
        self.viewport = Viewport()
        self.anchor = None
        self.desired_column = None
        self.last_was_kill = False
        self.dirty.mark_all()

    def load(self, source: Union[bytes, BinaryIO, None]) -> bool:
        """Replace the document with bytes from ``source``; False if reading failed."""
        if not self.buffer.load(source):
            return False
        self._reset()
        return True

    def load_file(self, path: Optional[str]) -> bool:
        if not self.buffer.load_file(path):
            return False
        self._reset()
        return True

    def load_text(self, content: Optional[str]) -> None:
        self.buffer.load_text(content)
        self._reset()

    def resize(self, width: int, height: int) -> None:
        """Set the visible size (at least 1x1) and scroll the caret back into view."""
        self.width = max(1, width)
        self.height = max(1, height)
        self._scroll_to_cursor()
        self.dirty.mark_all()

    # --- Dispatch ---

    def execute(self, command: cmd.AnyCommand):
        """Run one command and return its result (the text for copy/kill region)."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command: {command!r}")
        if not isinstance(command, cmd.VERTICAL_COMMANDS):
            self.desired_column = None
        if not isinstance(command, cmd.KillToLineEnd):
            self.last_was_kill = False
        logger.debug(f"Executing {command!r} at {self.cursor}")

        before = self.cursor
        result = handler(command)
        self.cursor = self.clamp(self.cursor)
        if self.anchor is not None and self.cursor != before:
            anchor_row = self.clamp(self.anchor).row
            self._mark_rows(min(before.row, self.cursor.row, anchor_row),
                            max(before.row, self.cursor.row, anchor_row))
        self._scroll_to_cursor()
        return result

    def move_left(self):
        return self.execute(cmd.MoveLeft())

    def move_right(self):
        return self.execute(cmd.MoveRight())

    def move_up(self):
        return self.execute(cmd.MoveUp())

    def move_down(self):
        return self.execute(cmd.MoveDown())

    def page_up(self):
        return self.execute(cmd.PageUp())

    def page_down(self):
        return self.execute(cmd.PageDown())

    def move_line_start(self):
        return self.execute(cmd.MoveLineStart())

    def move_line_end(self):
        return self.execute(cmd.MoveLineEnd())

    def move_word_forward(self):
        return self.execute(cmd.MoveWordForward())

    def move_word_backward(self):
        return self.execute(cmd.MoveWordBackward())

    def move_to(self, row: int, column: int):
        return self.execute(cmd.MoveTo(row, column))

    def insert_rune(self, rune: str):
        return self.execute(cmd.InsertRune(rune))

    def insert_text(self, text: str):
        return self.execute(cmd.InsertText(text))

    def delete_backward(self):
        return self.execute(cmd.DeleteBackward())

    def delete_forward(self):
        return self.execute(cmd.DeleteForward())

    def split_line(self):
        return self.execute(cmd.SplitLine())

    def start_selection(self):
        return self.execute(cmd.StartSelection())

    def copy_region(self) -> Optional[str]:
        return self.execute(cmd.CopyRegion())

    def kill_region(self) -> Optional[str]:
        return self.execute(cmd.KillRegion())

    def kill_to_line_end(self):
        return self.execute(cmd.KillToLineEnd())

    def yank(self):
        return self.execute(cmd.Yank())

    # --- Viewport and repaint bookkeeping ---

    def _scroll_to_cursor(self) -> bool:
        """Scroll the minimum amount that brings the caret into view.

        Rows are compared in buffer rows, but the horizontal bound is
        measured in screen cells: afterwards the runes between
        ``left_column`` and the caret take fewer than ``width`` cells. With
        zero-width combining marks the caret column itself may therefore
        be ``left_column + width`` or more while still on screen.
        """
        vp = self.viewport
        top, left = vp.top_row, vp.left_column
        row, col = self.cursor.row, self.cursor.column
        if row < top:
            top = row
        elif row >= top + self.height:
            top = row - self.height + 1
        if col < left:
            left = col
        elif col > left:
            # Leftmost column that still leaves a cell for the caret
            line = self.buffer.get_line(row)
            start, used = col, 0
            while start > left and used + rune_width(line[start - 1]) < self.width:
                start -= 1
                used += rune_width(line[start])
            left = start
        if (top, left) == (vp.top_row, vp.left_column):
            return False
        vp.top_row, vp.left_column = top, left
        self.dirty.mark_all()
        return True

    def _mark_rows(self, first_row: int, last_row: Optional[int] = None) -> None:
        """Mark buffer rows ``first_row..last_row`` dirty; None means to the bottom."""
        top = self.viewport.top_row
        y = max(0, first_row - top)
        bottom = self.height if last_row is None else min(self.height, last_row - top + 1)
        if bottom > y:
            self.dirty.mark(Rect(0, y, self.width, bottom - y))

    def consume_dirty(self) -> Optional[Rect]:
        """Return the screen area needing repaint since the last call."""
        return self.dirty.consume(self.screen_rect)

    def render(self, rect: Optional[Rect] = None) -> list[list[Cell]]:
        """Cells for ``rect`` (default: the whole visible area)."""
        return plan(self.buffer, self.viewport, self.selection, rect or self.screen_rect)

    def cursor_cell(self) -> tuple[int, int]:
        return cursor_cell(self.buffer, self.viewport, self.cursor)

    # --- Movement ---

    def _move_left(self, _):
        row, col = self.cursor.row, self.cursor.column
        if col > 0:
            self.cursor = Position(row, col - 1)
        elif row > 0:
            self.cursor = Position(row - 1, len(self.buffer.get_line(row - 1)))

    def _move_right(self, _):
        row, col = self.cursor.row, self.cursor.column
        if col < len(self.current_line()):
            self.cursor = Position(row, col + 1)
        elif row + 1 < self.buffer.count:
            self.cursor = Position(row + 1, 0)

    def _track_column(self, row: int) -> None:
        """Move to ``row``, snapping to the desired column (captured on first use)."""
        if self.desired_column is None:
            self.desired_column = self.cursor.column
        column = min(self.desired_column, len(self.buffer.get_line(row)))
        self.cursor = Position(row, column)

    def _move_up(self, _):
        if self.cursor.row > 0:
            self._track_column(self.cursor.row - 1)

    def _move_down(self, _):
        if self.cursor.row + 1 < self.buffer.count:
            self._track_column(self.cursor.row + 1)

    def _page_shift(self) -> int:
        return max(1, self.height - EditorConstants.PAGE_OVERLAP)

    def _page_down(self, _):
        row = self.cursor.row
        last = self.buffer.count - 1
        if row >= last:
            return
        new_row = min(row + self._page_shift(), last)
        self._track_column(new_row)
        top = self.viewport.top_row + (new_row - row)
        self.viewport.top_row = max(0, min(top, self.buffer.count - self.height))
        self.dirty.mark_all()

    def _page_up(self, _):
        row = self.cursor.row
        if row == 0:
            return
        new_row = max(0, row - self._page_shift())
        self._track_column(new_row)
        self.viewport.top_row = max(0, self.viewport.top_row - (row - new_row))
        self.dirty.mark_all()

    def _move_line_start(self, _):
        self.cursor = Position(self.cursor.row, 0)

    def _move_line_end(self, _):
        self.cursor = Position(self.cursor.row, len(self.current_line()))

    def _move_word_forward(self, _):
        target = word_forward(self.buffer, self.cursor)
        if target is not None:
            self.cursor = target

    def _move_word_backward(self, _):
        target = word_backward(self.buffer, self.cursor)
        if target is not None:
            self.cursor = target

    def _move_to(self, command: cmd.MoveTo):
        self.cursor = self.clamp(Position(command.row, command.column))

    # --- Insertion ---

    def _insert_rune(self, command: cmd.InsertRune):
        rune = command.rune
        if not isinstance(rune, str) or len(rune) != 1:
            raise ValueError(f"InsertRune takes exactly one code point, got {rune!r}")
        if rune == EditorConstants.LINE_SEPARATOR:
            return self._split_line(command)
        if self.read_only:
            return
        row, col = self.cursor.row, self.cursor.column
        line = self.current_line()
        self.buffer.set_line(row, line[:col] + rune + line[col:])
        self.cursor = Position(row, col + 1)
        self._mark_rows(row, row)

    def _insert_text(self, command: cmd.InsertText):
        if self.read_only or not command.text:
            return
        chunks = split_lines(command.text)
        row, col = self.cursor.row, self.cursor.column
        line = self.current_line()

        if len(chunks) == 1:
            self.buffer.set_line(row, line[:col] + chunks[0] + line[col:])
            self.cursor = Position(row, col + len(chunks[0]))
            self._mark_rows(row, row)
            return

        rest = line[col:]
        self.buffer.set_line(row, line[:col] + chunks[0])
        for offset, chunk in enumerate(chunks[1:], start=1):
            self.buffer.insert_line(row + offset, chunk)
        last_row = row + len(chunks) - 1
        last = self.buffer.get_line(last_row)
        self.buffer.set_line(last_row, last + rest)
        self.cursor = Position(last_row, len(last))
        self._mark_rows(row)

    def _split_line(self, _):
        if self.read_only:
            return
        row, col = self.cursor.row, self.cursor.column
        line = self.current_line()
        self.buffer.set_line(row, line[:col])
        self.buffer.insert_line(row + 1, line[col:])
        self.cursor = Position(row + 1, 0)
        self._mark_rows(row)

    # --- Deletion ---

    def _delete_backward(self, _):
        if self.read_only:
            return
        row, col = self.cursor.row, self.cursor.column
        line = self.current_line()
        if col > 0:
            self.buffer.set_line(row, line[:col - 1] + line[col:])
            self.cursor = Position(row, col - 1)
            self._mark_rows(row, row)
        elif row > 0:
            previous = self.buffer.get_line(row - 1)
            self.buffer.set_line(row - 1, previous + line)
            self.buffer.remove_line(row)
            self.cursor = Position(row - 1, len(previous))
            self._mark_rows(row - 1)

    def _delete_forward(self, _):
        if self.read_only:
            return
        row, col = self.cursor.row, self.cursor.column
        line = self.current_line()
        if col < len(line):
            self.buffer.set_line(row, line[:col] + line[col + 1:])
            self._mark_rows(row, row)
        elif row + 1 < self.buffer.count:
            self.buffer.set_line(row, line + self.buffer.get_line(row + 1))
            self.buffer.remove_line(row + 1)
            self._mark_rows(row)

    # --- Selection and kill ring ---

    def _start_selection(self, _):
        self.anchor = self.cursor

    def _clear_selection(self) -> None:
        if self.anchor is None:
            return
        start, end = region_bounds(self.clamp(self.anchor), self.cursor)
        self.anchor = None
        self._mark_rows(start.row, end.row)

    def region_text(self, start: Position, end: Position) -> str:
        """Text between two ordered positions, lines joined by LF."""
        start, end = self.clamp(start), self.clamp(end)
        sep = EditorConstants.LINE_SEPARATOR
        first = self.buffer.get_line(start.row)
        if start.row == end.row:
            return first[start.column:end.column]
        parts = [first[start.column:]]
        for row in range(start.row + 1, end.row):
            parts.append(self.buffer.get_line(row))
        parts.append(self.buffer.get_line(end.row)[:end.column])
        return sep.join(parts)

    def _delete_region(self, start: Position, end: Position) -> None:
        first = self.buffer.get_line(start.row)
        last = self.buffer.get_line(end.row)
        self.buffer.set_line(start.row, first[:start.column] + last[end.column:])
        for _ in range(end.row - start.row):
            self.buffer.remove_line(start.row + 1)
        self.cursor = start
        self._mark_rows(start.row, None if end.row > start.row else start.row)

    def _copy_region(self, _) -> Optional[str]:
        if self.anchor is None:
            return None
        start, end = region_bounds(self.clamp(self.anchor), self.cursor)
        text = self.region_text(start, end)
        self.clipboard.set(text)
        self._clear_selection()
        return text

    def _kill_region(self, _) -> Optional[str]:
        if self.anchor is None:
            return None
        start, end = region_bounds(self.clamp(self.anchor), self.cursor)
        text = self.region_text(start, end)
        self.clipboard.set(text)
        self._clear_selection()
        if not self.read_only:
            self._delete_region(start, end)
        return text

    def _kill_to_line_end(self, _):
        if self.read_only:
            return
        row, col = self.cursor.row, self.cursor.column
        line = self.current_line()
        if not line:
            self.buffer.remove_line(row)
            killed = EditorConstants.KILLED_LINE
            self.cursor = self.clamp(Position(row, 0))
        else:
            killed = line[col:]
            self.buffer.set_line(row, line[:col])
        if self.last_was_kill:
            self.clipboard.append(killed)
        else:
            self.clipboard.set(killed)
        self.last_was_kill = True
        self._mark_rows(min(row, self.cursor.row))

    def _yank(self, _):
        if self.read_only:
            return
        self._insert_text(cmd.InsertText(self.clipboard.contents))
        self._clear_selection()
