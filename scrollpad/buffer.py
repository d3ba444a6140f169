"""Line-oriented text storage for the editor."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator, Optional, Union

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def split_lines(content: str) -> list[str]:
    """Split text on LF only.

    CR is kept as ordinary line content, and a trailing LF yields a
    trailing empty line, so ``"abc\\n"`` becomes ``["abc", ""]``.
    """
    return content.split(EditorConstants.LINE_SEPARATOR)


class TextBuffer:
    """Ordered list of lines, each a string of code points.

    The buffer always holds at least one line; an empty document is a
    single empty line. Row arguments to ``insert_line``, ``remove_line``
    and ``set_line`` are trusted: the caller validates them.
    """

    def __init__(self, lines: Optional[list[str]] = None):
        self._lines: list[str] = list(lines) if lines else [""]
        # Bumped on every change; lets callers detect edits since a save
        self.version = 0

    @property
    def count(self) -> int:
        """Number of lines in the buffer."""
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    @property
    def lines(self) -> list[str]:
        """Copy of the lines, for inspection."""
        return list(self._lines)

    def load(self, source: Union[bytes, BinaryIO, None]) -> bool:
        """Replace the content with bytes read from ``source``.

        ``source`` is either a ``bytes`` object or a binary stream. Bytes
        are split on LF (0x0A) and decoded as UTF-8 with replacement
        characters. Returns False if reading fails, leaving the existing
        content untouched.
        """
        if source is None:
            raise ValueError("source must not be None")
        if isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        else:
            try:
                data = source.read()
            except OSError as e:
                logger.warning(f"Could not read buffer content: {e}")
                return False
        self._lines = split_lines(data.decode(EditorConstants.ENCODING, errors="replace"))
        self.version += 1
        logger.debug(f"Loaded {len(self._lines)} lines")
        return True

    def load_file(self, path: Optional[str]) -> bool:
        """Replace the content with the file at ``path``.

        Returns False on any I/O error without saying why; open the file
        yourself if you need the reason.
        """
        if path is None:
            raise ValueError("path must not be None")
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.warning(f"Could not load {path}: {e}")
            return False
        return self.load(data)

    def load_text(self, content: Optional[str]) -> None:
        """Replace the content with ``content`` split on LF."""
        if content is None:
            raise ValueError("content must not be None")
        self._lines = split_lines(content)
        self.version += 1

    def serialize(self) -> str:
        """Join the lines, writing a separator after every line.

        The last line gets one too, so this only inverts ``load_text``
        for input that already ends with a separator.
        """
        sep = EditorConstants.LINE_SEPARATOR
        return "".join(line + sep for line in self._lines)

    def get_line(self, row: int) -> str:
        """Return line ``row``, clamped to the first/last line."""
        if row >= len(self._lines):
            return self._lines[-1]
        if row < 0:
            return self._lines[0]
        return self._lines[row]

    def set_line(self, row: int, content: str) -> None:
        self._lines[row] = content
        self.version += 1

    def insert_line(self, pos: int, content: str) -> None:
        """Insert ``content`` as a new line before index ``pos``."""
        self._lines.insert(pos, content)
        self.version += 1

    def remove_line(self, pos: int) -> None:
        """Remove line ``pos``; removing the only line leaves one empty line."""
        del self._lines[pos]
        if not self._lines:
            self._lines.append("")
        self.version += 1
