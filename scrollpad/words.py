"""Word boundary scans (Emacs-style M-f / M-b).

Line boundaries separate words but are not runes themselves, so a scan
can run across any number of lines, empty ones included.
"""

from __future__ import annotations

import unicodedata
from enum import Enum
from typing import Optional, TYPE_CHECKING

from .region import Position

if TYPE_CHECKING:
    from .buffer import TextBuffer


class RuneClass(Enum):
    ALPHANUMERIC = "alphanumeric"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"


def classify(rune: str) -> RuneClass:
    """Classify a single rune.

    Symbols and anything else that is neither a letter, a digit nor
    whitespace count as punctuation.
    """
    if rune.isalnum():
        return RuneClass.ALPHANUMERIC
    if rune.isspace():
        return RuneClass.WHITESPACE
    return RuneClass.PUNCTUATION


def _is_word_rune(rune: Optional[str]) -> bool:
    # None stands for a line boundary
    return rune is not None and classify(rune) is RuneClass.ALPHANUMERIC


def _at_end(buffer: "TextBuffer", row: int, col: int) -> bool:
    return row >= buffer.count - 1 and col >= len(buffer.get_line(row))


def _rune_after(buffer: "TextBuffer", row: int, col: int) -> Optional[str]:
    line = buffer.get_line(row)
    return line[col] if col < len(line) else None


def _rune_before(buffer: "TextBuffer", row: int, col: int) -> Optional[str]:
    return buffer.get_line(row)[col - 1] if col > 0 else None


def word_forward(buffer: "TextBuffer", position: Position) -> Optional[Position]:
    """Return the end of the current or next word, or None if there is nowhere to go."""
    row = min(max(0, position.row), buffer.count - 1)
    col = min(max(0, position.column), len(buffer.get_line(row)))
    start = (row, col)

    def advance(row, col):
        if col < len(buffer.get_line(row)):
            return row, col + 1
        return row + 1, 0

    while not _at_end(buffer, row, col) and not _is_word_rune(_rune_after(buffer, row, col)):
        row, col = advance(row, col)
    while not _at_end(buffer, row, col) and _is_word_rune(_rune_after(buffer, row, col)):
        row, col = advance(row, col)

    if (row, col) == start:
        return None
    return Position(row, col)


def word_backward(buffer: "TextBuffer", position: Position) -> Optional[Position]:
    """Return the start of the current or previous word, or None at document start.

    The rune just before the caret decides whether a separator run is
    skipped first.
    """
    row = min(max(0, position.row), buffer.count - 1)
    col = min(max(0, position.column), len(buffer.get_line(row)))
    start = (row, col)

    def at_start(row, col):
        return row == 0 and col == 0

    def retreat(row, col):
        if col > 0:
            return row, col - 1
        return row - 1, len(buffer.get_line(row - 1))

    while not at_start(row, col) and not _is_word_rune(_rune_before(buffer, row, col)):
        row, col = retreat(row, col)
    while not at_start(row, col) and _is_word_rune(_rune_before(buffer, row, col)):
        row, col = retreat(row, col)

    if (row, col) == start:
        return None
    return Position(row, col)
