"""Caret positions and selection ranges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

COLUMN_BITS = 32
COLUMN_MASK = (1 << COLUMN_BITS) - 1


@dataclass(frozen=True, order=True)
class Position:
    """A caret position; ``column == len(line)`` is end of line.

    Ordering is row first, then column.
    """
    row: int = 0
    column: int = 0


def encode(position: Position) -> int:
    """Pack a position into one integer key.

    The row occupies the high bits and the column the low 32 bits, so
    comparing keys gives row-then-column order.
    """
    row = max(0, position.row)
    column = min(max(0, position.column), COLUMN_MASK)
    return (row << COLUMN_BITS) | column


def decode(key: int) -> Position:
    return Position(key >> COLUMN_BITS, key & COLUMN_MASK)


def region_bounds(anchor: Position, cursor: Position) -> tuple[Position, Position]:
    """Return ``(start, end)`` with ``start <= end``, whichever came first."""
    a = encode(anchor)
    b = encode(cursor)
    if a > b:
        a, b = b, a
    return decode(a), decode(b)


def point_in_region(point: Position, anchor: Optional[Position], cursor: Position) -> bool:
    """True if ``point`` lies in the selection, both ends inclusive."""
    if anchor is None:
        return False
    start, end = region_bounds(anchor, cursor)
    return encode(start) <= encode(point) <= encode(end)
