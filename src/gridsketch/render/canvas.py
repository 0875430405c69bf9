"""Character Canvas protocol and the in-memory text grid.

The Canvas is a derived view: it is never persisted and is always rebuilt
from the shape registry. ``TextCanvas`` is the only concrete backend; the
protocol keeps the registry independent of it so tests can substitute a
recording fake.
"""

from __future__ import annotations

from typing import Protocol, Tuple


class Canvas(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def clear(self) -> None:
        ...

    def plot(self, x: int, y: int, ch: str) -> None:
        ...

    def render(self) -> Tuple[str, ...]:
        ...


class TextCanvas:
    """Fixed-size row-major grid of single characters.

    Coordinate system: (x, y) where x is column and y is row. Origin is
    top-left. Writes outside ``[0, width) x [0, height)`` are dropped.
    """

    def __init__(self, width: int, height: int, blank: str = " ") -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be > 0")
        if len(blank) != 1:
            raise ValueError("blank must be a single character")
        self.width = int(width)
        self.height = int(height)
        self.blank = blank
        self._rows: list[list[str]] = [[blank] * self.width for _ in range(self.height)]

    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self) -> None:
        for row in self._rows:
            row[:] = [self.blank] * self.width

    def plot(self, x: int, y: int, ch: str) -> None:
        if self.in_bounds(x, y):
            self._rows[y][x] = ch

    def cell(self, x: int, y: int) -> str:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height}")
        return self._rows[y][x]

    def render(self) -> Tuple[str, ...]:
        """Return one string per scanline, top to bottom."""
        return tuple("".join(row) for row in self._rows)

    def to_text(self) -> str:
        return "\n".join(self.render())

    def is_blank(self) -> bool:
        return all(ch == self.blank for row in self._rows for ch in row)
