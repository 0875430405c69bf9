"""Shape rasterizers.

Pure functions from (geometry, anchor) to sets of canvas cells. Every
variant has an outline and an interior rasterizer; the interior never
contains outline cells. Results are clipped to the canvas bounds, and
degenerate sizes (<= 0) produce empty sets.

Rasterizers are looked up in ``RASTERIZERS`` by geometry type. A new
variant registers an ``(outline_fn, interior_fn)`` pair there.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, Set, Tuple, Type

from gridsketch.core.shapes import Anchor, Circle, Geometry, Line, Square, Triangle

__all__ = [
    "Cell",
    "RASTERIZERS",
    "DEFAULT_ASPECT_SCALE",
    "outline_cells",
    "interior_cells",
    "circle_distance",
]

Cell = Tuple[int, int]
# Each function receives the variant it is registered for
CellFn = Callable[[Any, Anchor, float], Set[Cell]]

DEFAULT_ASPECT_SCALE = 2.0


def circle_distance(dx: int, dy: int, scale: float) -> float:
    """Aspect-corrected distance of offset (dx, dy) from a circle center."""
    return math.hypot(dx, dy * scale)


def _circle_cells(c: Circle, anchor: Anchor, scale: float) -> tuple[Set[Cell], Set[Cell]]:
    r = c.radius
    if r <= 0:
        return set(), set()
    x0, y0 = anchor
    outline: Set[Cell] = set()
    interior: Set[Cell] = set()
    # Rows beyond (r + 0.5) / scale cannot reach the outline band
    dy_max = int(math.floor((r + 0.5) / scale))
    for dy in range(-dy_max, dy_max + 1):
        for dx in range(-r, r + 1):
            d = circle_distance(dx, dy, scale)
            if abs(d - r) <= 0.5:
                outline.add((x0 + dx, y0 + dy))
            elif d < r:
                interior.add((x0 + dx, y0 + dy))
    return outline, interior


def _circle_outline(g: Circle, anchor: Anchor, scale: float) -> Set[Cell]:
    return _circle_cells(g, anchor, scale)[0]


def _circle_interior(g: Circle, anchor: Anchor, scale: float) -> Set[Cell]:
    return _circle_cells(g, anchor, scale)[1]


def _square_cells(s: Square, anchor: Anchor, scale: float) -> tuple[Set[Cell], Set[Cell]]:
    n = s.side
    if n <= 0:
        return set(), set()
    x0, y0 = anchor
    outline: Set[Cell] = set()
    interior: Set[Cell] = set()
    for by in range(n):
        # Block rows are compressed onto canvas rows by the aspect scale
        cy = y0 + int(by // scale)
        edge_row = by == 0 or by == n - 1
        for bx in range(n):
            cell = (x0 + bx, cy)
            if edge_row or bx == 0 or bx == n - 1:
                outline.add(cell)
            else:
                interior.add(cell)
    return outline, interior - outline


def _square_outline(g: Square, anchor: Anchor, scale: float) -> Set[Cell]:
    return _square_cells(g, anchor, scale)[0]


def _square_interior(g: Square, anchor: Anchor, scale: float) -> Set[Cell]:
    return _square_cells(g, anchor, scale)[1]


def _triangle_outline(g: Triangle, anchor: Anchor, scale: float) -> Set[Cell]:
    h = g.height
    if h <= 0:
        return set()
    x0, y0 = anchor
    out: Set[Cell] = set()
    for i in range(h):
        out.add((x0 - i, y0 + i))
        out.add((x0 + i, y0 + i))
    base_y = y0 + h - 1
    for j in range(2 * h - 1):
        out.add((x0 - h + 1 + j, base_y))
    return out


def _triangle_interior(g: Triangle, anchor: Anchor, scale: float) -> Set[Cell]:
    h = g.height
    if h <= 0:
        return set()
    x0, y0 = anchor
    span: Set[Cell] = set()
    for i in range(h):
        for x in range(x0 - i, x0 + i + 1):
            span.add((x, y0 + i))
    return span - _triangle_outline(g, anchor, scale)


def _line_outline(g: Line, anchor: Anchor, scale: float) -> Set[Cell]:
    x0, y0 = anchor
    return {(x0 + k, y0) for k in range(max(0, g.length))}


def _no_interior(g: Geometry, anchor: Anchor, scale: float) -> Set[Cell]:
    return set()


RASTERIZERS: Dict[Type[Geometry], Tuple[CellFn, CellFn]] = {
    Circle: (_circle_outline, _circle_interior),
    Square: (_square_outline, _square_interior),
    Triangle: (_triangle_outline, _triangle_interior),
    Line: (_line_outline, _no_interior),
}


def _lookup(g: Geometry) -> Tuple[CellFn, CellFn]:
    try:
        return RASTERIZERS[type(g)]
    except KeyError:
        raise TypeError(f"no rasterizer registered for {type(g).__name__}") from None


def _clip(cells: Iterable[Cell], bounds: Tuple[int, int]) -> Set[Cell]:
    w, h = bounds
    return {(x, y) for (x, y) in cells if 0 <= x < w and 0 <= y < h}


def outline_cells(
    g: Geometry,
    anchor: Anchor,
    bounds: Tuple[int, int],
    scale: float = DEFAULT_ASPECT_SCALE,
) -> Set[Cell]:
    """Outline cells of *g* at *anchor*, clipped to ``bounds = (W, H)``."""
    return _clip(_lookup(g)[0](g, anchor, scale), bounds)


def interior_cells(
    g: Geometry,
    anchor: Anchor,
    bounds: Tuple[int, int],
    scale: float = DEFAULT_ASPECT_SCALE,
) -> Set[Cell]:
    """Interior cells of *g* at *anchor*, clipped to ``bounds = (W, H)``."""
    return _clip(_lookup(g)[1](g, anchor, scale), bounds)
