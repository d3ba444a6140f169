"""Screen rectangles, the viewport offset and dirty-region bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Rect:
    """Screen rectangle; ``right`` and ``bottom`` are exclusive."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def union(self, other: "Rect") -> "Rect":
        if self.is_empty():
            return other
        if other.is_empty():
            return self
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return Rect(x, y, max(self.right, other.right) - x, max(self.bottom, other.bottom) - y)

    def intersect(self, other: "Rect") -> "Rect":
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        return Rect(x, y, max(0, right - x), max(0, bottom - y))


@dataclass
class Viewport:
    """Buffer coordinate shown in the top-left visible cell."""
    top_row: int = 0
    left_column: int = 0


class DirtyRegion:
    """Accumulates repaint requests until the next paint pass consumes them."""

    def __init__(self):
        self._rect: Optional[Rect] = None
        self.full = False

    @property
    def pending(self) -> bool:
        return self.full or self._rect is not None

    def mark(self, rect: Rect) -> None:
        if rect.is_empty():
            return
        self._rect = rect if self._rect is None else self._rect.union(rect)

    def mark_all(self) -> None:
        self.full = True

    def consume(self, surface: Rect) -> Optional[Rect]:
        """Return the area to repaint, clipped to ``surface``, and reset.

        A whole-surface request returns ``surface`` itself; None means
        nothing needs painting.
        """
        if self.full:
            result: Optional[Rect] = surface
        elif self._rect is not None:
            result = self._rect.intersect(surface)
            if result.is_empty():
                result = None
        else:
            result = None
        self._rect = None
        self.full = False
        return result
