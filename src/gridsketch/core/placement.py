"""Placement validation: canvas fit and structural duplicates.

``fits`` is a coordinate-only check on each variant's bounding box. It does
not rasterize, so it is stricter than "every painted cell is on the
canvas": a circle whose ring happens to skip the corner rows still has to
fit its full ``r / scale`` vertical extent.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, Type

from gridsketch.core.shapes import (
    Anchor,
    Circle,
    Geometry,
    Line,
    PlacedShape,
    Square,
    Triangle,
)

__all__ = ["BOUNDS", "fits", "is_duplicate", "anchor_taken"]

# Each rule receives the variant it is registered for
BoundsFn = Callable[[Any, int, int, int, int, float], bool]


def _circle_fits(g: Circle, x: int, y: int, w: int, h: int, scale: float) -> bool:
    r = g.radius
    ry = r / scale
    return x - r >= 0 and x + r < w and y - ry >= 0 and y + ry < h


def _square_fits(g: Square, x: int, y: int, w: int, h: int, scale: float) -> bool:
    s = max(1, g.side)
    rows = int(math.floor((s - 1) / scale))
    return x >= 0 and x + s - 1 < w and y >= 0 and y + rows < h


def _triangle_fits(g: Triangle, x: int, y: int, w: int, h: int, scale: float) -> bool:
    k = max(1, g.height) - 1
    return x - k >= 0 and x + k < w and y >= 0 and y + k < h


def _line_fits(g: Line, x: int, y: int, w: int, h: int, scale: float) -> bool:
    n = max(1, g.length)
    return x >= 0 and x + n - 1 < w and 0 <= y < h


BOUNDS: Dict[Type[Geometry], BoundsFn] = {
    Circle: _circle_fits,
    Square: _square_fits,
    Triangle: _triangle_fits,
    Line: _line_fits,
}


def fits(
    g: Geometry, anchor: Anchor, width: int, height: int, scale: float = 2.0
) -> bool:
    """True when *g* anchored at *anchor* lies inside ``[0,W) x [0,H)``."""
    fn = BOUNDS.get(type(g))
    if fn is None:
        raise TypeError(f"no bounds rule registered for {type(g).__name__}")
    x, y = anchor
    return fn(g, int(x), int(y), int(width), int(height), float(scale))


def is_duplicate(
    g: Geometry,
    anchor: Anchor,
    entries: Iterable[PlacedShape],
    *,
    ignore_id: int | None = None,
) -> bool:
    """True when an entry has the same kind, dims and anchor. Color is ignored."""
    for e in entries:
        if ignore_id is not None and e.id == ignore_id:
            continue
        if e.kind == g.kind and e.geometry.dims == g.dims and e.anchor == anchor:
            return True
    return False


def anchor_taken(
    anchor: Anchor, entries: Iterable[PlacedShape], *, ignore_id: int | None = None
) -> PlacedShape | None:
    """Return the first entry (other than *ignore_id*) anchored at *anchor*."""
    for e in entries:
        if e.id != ignore_id and e.anchor == anchor:
            return e
    return None
