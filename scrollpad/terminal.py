"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
import unicodedata
from typing import Optional

import blessed
from curtsies import Input

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Doubles as the painter for EditorView: cell coordinates are relative
    to the top-left of the screen, and the last row is kept for the
    status line.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[Input] = None
        self._last_status: Optional[str] = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            # Enter raw mode immediately so reads work
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except (OSError, ValueError) as e:
                logger.warning(f"Could not restore terminal input mode: {e}")
            finally:
                self._curtsies_input = None

    def clear_screen(self):
        """Clear the entire screen."""
        print(self.term.home + self.term.clear, end='')
        self._last_status = None

    def draw_rune(self, col: int, row: int, text: str, selected: bool) -> None:
        """Paint one cell; selected cells are shown in reverse video."""
        if not text or unicodedata.category(text[0]) in ('Cc', 'Cf'):
            # Control characters would move the terminal cursor
            text = ' '
        if selected:
            text = self.term.reverse + text + self.term.normal
        print(self.term.move(row, col) + text, end='')

    def set_cursor(self, col: int, row: int) -> None:
        """Place the visible cursor and flush pending output."""
        print(self.term.move(row, col) + self.term.normal_cursor, end='', flush=True)

    def draw_status(self, text: Optional[str]) -> bool:
        """Draw the status line; the help hint is shown right-aligned when idle.

        Returns True if the line changed.
        """
        width = self.term.width
        if text:
            status = text[:width].ljust(width)
        else:
            hint = EditorConstants.HELP_HINT
            status = hint.rjust(width - 1)[:width].ljust(width)
        if status == self._last_status:
            return False
        print(self.term.move(self.term.height - 1, 0) + self.term.reverse + status + self.term.normal, end='')
        self._last_status = status
        return True

    def draw_error_message(self, message1: str, message2: str = ""):
        """Draw an error message in the center of the screen."""
        print(self.term.home + self.term.clear, end='')
        self._last_status = None
        center_y = self.term.height // 2
        for offset, message in enumerate((message1, message2)):
            if message:
                left = max(0, (self.term.width - len(message)) // 2)
                print(self.term.move(center_y + offset, left) + message[:self.term.width], end='')
        print('', end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None on timeout.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1
