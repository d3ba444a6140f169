"""Host-facing adapter: focus, key and mouse input, and painting."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from .commands import CommandRegistry, MoveTo
from .geometry import Rect
from .keyboard import KeyEvent, MouseEvent
from .session import EditSession
from .view import column_at_cell

logger = logging.getLogger(__name__)


class Painter(Protocol):
    """Drawing surface the view paints into, in widget-relative cells."""

    def draw_rune(self, col: int, row: int, text: str, selected: bool) -> None:
        ...

    def set_cursor(self, col: int, row: int) -> None:
        ...


class EditorView:
    """Connects an EditSession to a host container."""

    can_focus = True

    def __init__(self, session: Optional[EditSession] = None, registry: Optional[CommandRegistry] = None,
                 focus_request: Optional[Callable[["EditorView"], None]] = None):
        self.session = session if session is not None else EditSession()
        self.registry = registry if registry is not None else CommandRegistry()
        self.focus_request = focus_request
        self.has_focus = False

    def process_key(self, event: KeyEvent) -> bool:
        """Execute the command bound to ``event``; False if the key is not ours."""
        command = self.registry.resolve(event)
        if command is None:
            logger.debug(f"Unbound key {event.raw!r}")
            return False
        self.session.execute(command)
        return True

    def mouse_event(self, event: MouseEvent) -> bool:
        """Place the caret on the rune under a button-1 click, requesting focus first."""
        if not event.button1_clicked:
            return False
        if not self.has_focus and self.focus_request is not None:
            self.focus_request(self)
        session = self.session
        viewport = session.viewport
        row = min(viewport.top_row + event.y, session.buffer.count - 1)
        column = column_at_cell(session.buffer.get_line(row), viewport.left_column, event.x)
        session.execute(MoveTo(row, column))
        return True

    def set_focus(self, focused: bool) -> None:
        if focused != self.has_focus:
            self.has_focus = focused
            # Selection highlight depends on focus
            if self.session.selecting:
                self.session.dirty.mark_all()

    def redraw(self, painter: Painter, region: Optional[Rect] = None) -> Optional[Rect]:
        """Paint ``region`` (default: whatever is dirty) and place the cursor.

        Returns the rectangle that was painted, or None if nothing was.
        """
        session = self.session
        if region is None:
            region = session.consume_dirty()
        else:
            region = region.intersect(session.screen_rect)
        if region is not None and not region.is_empty():
            for dy, cells in enumerate(session.render(region)):
                for dx, cell in enumerate(cells):
                    if cell.is_continuation:
                        continue
                    painter.draw_rune(region.x + dx, region.y + dy, cell.text,
                                      cell.selected and self.has_focus)
        else:
            region = None
        col, row = session.cursor_cell()
        painter.set_cursor(col, row)
        return region
