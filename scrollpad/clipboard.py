"""Single-slot clipboard shared by kill and yank commands."""

from __future__ import annotations

import logging
from typing import Optional

import pyperclip

logger = logging.getLogger(__name__)


class Clipboard:
    """One process-wide text slot; the last write wins.

    Edit sessions receive the clipboard they use, so tests can hand in
    their own instance instead of the shared one.
    """

    def __init__(self, contents: str = ""):
        self._contents = contents

    @property
    def contents(self) -> str:
        return self._contents

    def set(self, text: str) -> None:
        """Replace the contents."""
        self._contents = text

    def append(self, text: str) -> None:
        """Append to the contents (consecutive kills)."""
        self.set(self.contents + text)


class SystemClipboard(Clipboard):
    """Clipboard mirrored to the OS clipboard through pyperclip.

    If no OS clipboard mechanism is available the slot keeps working
    inside the process and the failure is logged once.
    """

    def __init__(self, contents: str = ""):
        super().__init__(contents)
        self._available = True

    def _disable(self, error: Exception) -> None:
        if self._available:
            logger.warning(f"System clipboard unavailable, using internal clipboard: {error}")
        self._available = False

    @property
    def contents(self) -> str:
        if self._available:
            try:
                pasted = pyperclip.paste()
            except pyperclip.PyperclipException as e:
                self._disable(e)
            else:
                if pasted is not None:
                    self._contents = pasted
        return self._contents

    def set(self, text: str) -> None:
        self._contents = text
        if self._available:
            try:
                pyperclip.copy(text)
            except pyperclip.PyperclipException as e:
                self._disable(e)


# Global instance
_clipboard: Optional[Clipboard] = None


def get_clipboard() -> Clipboard:
    """Get the clipboard shared by every widget in the process."""
    global _clipboard
    if _clipboard is None:
        _clipboard = Clipboard()
    return _clipboard


def set_clipboard(clipboard: Clipboard) -> None:
    """Replace the shared clipboard, e.g. with a SystemClipboard."""
    global _clipboard
    _clipboard = clipboard
