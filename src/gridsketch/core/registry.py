"""ShapeRegistry: the authoritative, ordered collection of placed shapes.

The registry owns a Canvas and keeps it consistent with its entries by a
full clear-and-replay redraw after every mutation. Insertion order is
painting order, so later shapes cover earlier ones where they overlap.

Every mutating operation validates first and commits second: a rejected
operation leaves both the entries and the canvas untouched and returns an
:class:`~gridsketch.core.results.OpResult` describing why.

Example usage:

    from gridsketch.core.registry import ShapeRegistry
    from gridsketch.core.shapes import Circle, Triangle
    from gridsketch.render.canvas import TextCanvas

    reg = ShapeRegistry(TextCanvas(80, 25))
    res = reg.add(Circle(radius=3), (10, 10), outline="red")
    assert res.ok and res.shape_id == 1
    reg.add(Triangle(height=4), (30, 5))
    reg.move(1, (12, 10))
    reg.undo()
    print(reg.canvas.to_text())
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from gridsketch.core.colors import (
    DEFAULT_COLOR,
    UnsupportedColorError,
    color_name,
    resolve_color,
)
from gridsketch.core.placement import anchor_taken, fits, is_duplicate
from gridsketch.core.results import OpResult
from gridsketch.core.shapes import Anchor, Geometry, PlacedShape
from gridsketch.render.canvas import Canvas, TextCanvas
from gridsketch.render.rasterize import (
    DEFAULT_ASPECT_SCALE,
    interior_cells,
    outline_cells,
)

__all__ = ["ShapeRegistry", "EDITABLE_PROPERTIES"]

logger = logging.getLogger(__name__)

# Size may also be addressed by the variant's own name (radius, side, ...)
EDITABLE_PROPERTIES = ("x", "y", "size", "outline", "fill", "filled")

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def _parse_int(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    return int(str(value).strip())


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    v = str(value).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"expected true or false, got {value!r}")


class ShapeRegistry:
    """
    Ordered shape entries plus the canvas derived from them.
    - Assigns monotonically increasing ids, never reused.
    - Rejects placements that do not fit or duplicate an entry.
    - Redraws the whole canvas after every successful mutation.
    """

    def __init__(
        self, canvas: Canvas, *, aspect_scale: float = DEFAULT_ASPECT_SCALE
    ) -> None:
        if aspect_scale <= 0:
            raise ValueError("aspect_scale must be > 0")
        self._canvas = canvas
        self._scale = float(aspect_scale)
        self._entries: list[PlacedShape] = []
        self._next_id = 1

    @classmethod
    def with_text_canvas(
        cls,
        width: int,
        height: int,
        *,
        aspect_scale: float = DEFAULT_ASPECT_SCALE,
        blank: str = " ",
    ) -> "ShapeRegistry":
        return cls(TextCanvas(width, height, blank), aspect_scale=aspect_scale)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def canvas(self) -> Canvas:
        return self._canvas

    @property
    def aspect_scale(self) -> float:
        return self._scale

    @property
    def entries(self) -> tuple[PlacedShape, ...]:
        return tuple(self._entries)

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PlacedShape]:
        return iter(tuple(self._entries))

    def get(self, shape_id: int) -> PlacedShape | None:
        for e in self._entries:
            if e.id == shape_id:
                return e
        return None

    def fits(self, g: Geometry, anchor: Anchor) -> bool:
        w, h = self._canvas.size()
        return fits(g, anchor, w, h, self._scale)

    def render(self) -> tuple[str, ...]:
        return self._canvas.render()

    def describe(self) -> list[str]:
        """One human readable line per entry, in registry order."""
        lines: list[str] = []
        for e in self._entries:
            fill = color_name(e.fill) if e.filled else "none"
            lines.append(
                f"{e.id}: {e.kind} {e.geometry.size_name}={e.geometry.size}"
                f" at ({e.anchor[0]}, {e.anchor[1]})"
                f" outline={color_name(e.outline)} fill={fill}"
            )
        return lines

    # ------------------------------------------------------------------
    # Redraw protocol
    # ------------------------------------------------------------------
    def redraw(self) -> None:
        """Clear the canvas and replay every entry in registry order."""
        self._canvas.clear()
        bounds = self._canvas.size()
        for e in self._entries:
            if e.filled:
                for x, y in interior_cells(e.geometry, e.anchor, bounds, self._scale):
                    self._canvas.plot(x, y, e.fill)
            for x, y in outline_cells(e.geometry, e.anchor, bounds, self._scale):
                self._canvas.plot(x, y, e.outline)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _check_placement(
        self, g: Geometry, anchor: Anchor, *, ignore_id: int | None = None
    ) -> OpResult | None:
        if g.size <= 0:
            return OpResult.failure(
                "invalid_value", f"{g.size_name} must be a positive integer"
            )
        if not self.fits(g, anchor):
            w, h = self._canvas.size()
            return OpResult.failure(
                "out_of_bounds",
                f"{g.kind} with {g.size_name} {g.size} at {anchor} does not fit"
                f" on the {w}x{h} canvas",
            )
        if is_duplicate(g, anchor, self._entries, ignore_id=ignore_id):
            return OpResult.failure(
                "duplicate", f"an identical {g.kind} already exists at {anchor}"
            )
        return None

    def _replace_entry(self, new: PlacedShape) -> None:
        for i, e in enumerate(self._entries):
            if e.id == new.id:
                self._entries[i] = new
                return
        raise KeyError(new.id)  # pragma: no cover - callers look up first

    def _not_found(self, shape_id: object) -> OpResult:
        logger.info("shape %s not found", shape_id)
        return OpResult.failure("not_found", f"shape {shape_id} not found")

    def add(
        self,
        g: Geometry,
        anchor: Anchor,
        outline: str = DEFAULT_COLOR,
        fill: str | None = None,
    ) -> OpResult:
        """Append a shape. A *fill* color marks the shape as filled."""
        anchor = (int(anchor[0]), int(anchor[1]))
        try:
            outline_ch = resolve_color(outline)
            fill_ch = resolve_color(fill) if fill is not None else DEFAULT_COLOR
        except UnsupportedColorError as e:
            logger.info("add rejected: %s", e)
            return OpResult.failure("unsupported_color", str(e))
        err = self._check_placement(g, anchor)
        if err is not None:
            logger.info("add rejected: %s", err.message)
            return err
        entry = PlacedShape(
            id=self._next_id,
            geometry=g,
            anchor=anchor,
            outline=outline_ch,
            fill=fill_ch,
            filled=fill is not None,
        )
        self._entries.append(entry)
        self._next_id += 1
        self.redraw()
        logger.debug("added %r", entry)
        return OpResult.success(
            f"added {g.kind} {entry.id} at {anchor}", shape_id=entry.id
        )

    def remove(self, shape_id: int) -> OpResult:
        entry = self.get(shape_id)
        if entry is None:
            return self._not_found(shape_id)
        self._entries.remove(entry)
        self.redraw()
        logger.debug("removed shape %d", shape_id)
        return OpResult.success(f"removed {entry.kind} {shape_id}", shape_id=shape_id)

    def undo(self) -> OpResult:
        """Remove the most recently appended entry; a no-op when empty."""
        if not self._entries:
            return OpResult.success("nothing to undo")
        entry = self._entries.pop()
        self.redraw()
        logger.debug("undid shape %d", entry.id)
        return OpResult.success(f"undid {entry.kind} {entry.id}", shape_id=entry.id)

    def move(self, shape_id: int, anchor: Anchor) -> OpResult:
        entry = self.get(shape_id)
        if entry is None:
            return self._not_found(shape_id)
        anchor = (int(anchor[0]), int(anchor[1]))
        if not self.fits(entry.geometry, anchor):
            logger.info("move of %d to %s rejected: does not fit", shape_id, anchor)
            return OpResult.failure(
                "out_of_bounds",
                f"{entry.kind} {shape_id} does not fit at {anchor}",
                shape_id=shape_id,
            )
        other = anchor_taken(anchor, self._entries, ignore_id=shape_id)
        if other is not None:
            logger.info("move of %d to %s rejected: occupied", shape_id, anchor)
            return OpResult.failure(
                "occupied",
                f"{anchor} is occupied by {other.kind} {other.id}",
                shape_id=shape_id,
            )
        self._replace_entry(entry.with_changes(anchor=anchor))
        self.redraw()
        logger.debug("moved shape %d to %s", shape_id, anchor)
        return OpResult.success(
            f"moved {entry.kind} {shape_id} to {anchor}", shape_id=shape_id
        )

    def recolor(
        self, shape_id: int, outline: str, fill: str | None = None
    ) -> OpResult:
        """Change outline (and optionally fill) color. A fill marks it filled."""
        entry = self.get(shape_id)
        if entry is None:
            return self._not_found(shape_id)
        try:
            outline_ch = resolve_color(outline)
            fill_ch = resolve_color(fill) if fill is not None else entry.fill
        except UnsupportedColorError as e:
            logger.info("recolor of %d rejected: %s", shape_id, e)
            return OpResult.failure("unsupported_color", str(e), shape_id=shape_id)
        self._replace_entry(
            entry.with_changes(
                outline=outline_ch,
                fill=fill_ch,
                filled=entry.filled or fill is not None,
            )
        )
        self.redraw()
        return OpResult.success(f"painted {entry.kind} {shape_id}", shape_id=shape_id)

    def edit(self, shape_id: int, prop: str, value: object) -> OpResult:
        """Update one property; see ``EDITABLE_PROPERTIES``."""
        entry = self.get(shape_id)
        if entry is None:
            return self._not_found(shape_id)
        name = prop.strip().lower()
        g = entry.geometry
        try:
            if name in ("x", "y"):
                v = _parse_int(value)
                anchor = (v, entry.anchor[1]) if name == "x" else (entry.anchor[0], v)
                err = self._check_placement(g, anchor, ignore_id=shape_id)
                other = anchor_taken(anchor, self._entries, ignore_id=shape_id)
                if err is None and other is not None:
                    err = OpResult.failure(
                        "occupied",
                        f"{anchor} is occupied by {other.kind} {other.id}",
                    )
                updated = entry.with_changes(anchor=anchor)
            elif name in ("size", g.size_name):
                v = _parse_int(value)
                new_g = g.resized(v)
                err = self._check_placement(new_g, entry.anchor, ignore_id=shape_id)
                updated = entry.with_changes(geometry=new_g)
            elif name == "outline":
                err = None
                updated = entry.with_changes(outline=resolve_color(str(value)))
            elif name == "fill":
                err = None
                updated = entry.with_changes(
                    fill=resolve_color(str(value)), filled=True
                )
            elif name == "filled":
                err = None
                updated = entry.with_changes(filled=_parse_bool(value))
            else:
                return OpResult.failure(
                    "unknown_property",
                    f"unknown property {prop!r}: must be one of "
                    + ", ".join(EDITABLE_PROPERTIES + (g.size_name,)),
                    shape_id=shape_id,
                )
        except UnsupportedColorError as e:
            return OpResult.failure("unsupported_color", str(e), shape_id=shape_id)
        except ValueError as e:
            return OpResult.failure(
                "invalid_value", f"invalid {name}: {e}", shape_id=shape_id
            )
        if err is not None:
            logger.info("edit of %d rejected: %s", shape_id, err.message)
            return OpResult.failure(err.error or "invalid_value", err.message, shape_id)
        self._replace_entry(updated)
        self.redraw()
        logger.debug("edited shape %d %s=%r", shape_id, name, value)
        return OpResult.success(
            f"set {name} of {entry.kind} {shape_id}", shape_id=shape_id
        )

    def clear(self) -> OpResult:
        """Drop every entry. Ids keep increasing after a clear."""
        self._entries.clear()
        self._canvas.clear()
        return OpResult.success("cleared")

    def replace(self, shapes: Iterable[PlacedShape]) -> list[str]:
        """Replace all entries wholesale (used by load).

        Entries that repeat an id, do not fit or duplicate an earlier entry
        are dropped; a message per dropped entry is returned. The next id
        becomes ``max(ids) + 1``.
        """
        kept: list[PlacedShape] = []
        skipped: list[str] = []
        w, h = self._canvas.size()
        seen: set[int] = set()
        for s in shapes:
            g = s.geometry
            if s.id in seen:
                skipped.append(f"shape {s.id}: repeated id")
            elif g.size <= 0:
                skipped.append(f"shape {s.id}: {g.size_name} must be positive")
            elif not fits(g, s.anchor, w, h, self._scale):
                skipped.append(f"shape {s.id}: does not fit on the {w}x{h} canvas")
            elif is_duplicate(g, s.anchor, kept):
                skipped.append(f"shape {s.id}: duplicate {g.kind} at {s.anchor}")
            else:
                kept.append(s)
                seen.add(s.id)
                continue
            logger.warning("skipping %s", skipped[-1])
        self._entries = kept
        self._next_id = max((s.id for s in kept), default=0) + 1
        self.redraw()
        logger.debug("replaced registry with %d shapes", len(kept))
        return skipped
