"""Shape geometry variants and placed-shape entries.

Each geometry is an immutable dataclass carrying a single size parameter.
Variants are registered by kind name in ``SHAPE_TYPES`` so the persistence
codec and the command layer can build them from text. Rasterization and
bounds checks dispatch on the variant type (see
:mod:`gridsketch.render.rasterize` and :mod:`gridsketch.core.placement`).

Example usage:

    from gridsketch.core.shapes import Circle, PlacedShape, make_geometry

    geom = make_geometry("circle", 3)
    assert geom == Circle(radius=3)
    entry = PlacedShape(id=1, geometry=geom, anchor=(10, 10), outline="*")
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, ClassVar, Dict, Tuple, Type, TypeVar, Union

from gridsketch.core.colors import DEFAULT_COLOR
from gridsketch.settings.values import SHAPE_KINDS

__all__ = [
    "Circle",
    "Square",
    "Triangle",
    "Line",
    "Geometry",
    "Anchor",
    "SHAPE_TYPES",
    "register_shape",
    "make_geometry",
    "PlacedShape",
]

Anchor = Tuple[int, int]

_G = TypeVar("_G")

SHAPE_TYPES: Dict[str, Type["Geometry"]] = {}


def register_shape(cls: Type[_G]) -> Type[_G]:
    """Class decorator adding a geometry variant to ``SHAPE_TYPES``."""
    SHAPE_TYPES[getattr(cls, "kind")] = cls  # type: ignore[assignment]
    return cls


@register_shape
@dataclass(frozen=True, slots=True)
class Circle:
    """Circle anchored at its center."""

    radius: int

    kind: ClassVar[str] = "circle"
    size_name: ClassVar[str] = "radius"

    @property
    def size(self) -> int:
        return self.radius

    @property
    def dims(self) -> tuple[int, int]:
        return (self.radius, 0)

    def resized(self, size: int) -> "Circle":
        return Circle(radius=size)


@register_shape
@dataclass(frozen=True, slots=True)
class Square:
    """Square anchored at its top-left corner."""

    side: int

    kind: ClassVar[str] = "square"
    size_name: ClassVar[str] = "side"

    @property
    def size(self) -> int:
        return self.side

    @property
    def dims(self) -> tuple[int, int]:
        return (self.side, self.side)

    def resized(self, size: int) -> "Square":
        return Square(side=size)


@register_shape
@dataclass(frozen=True, slots=True)
class Triangle:
    """Isosceles triangle anchored at its apex; the base is ``2h-1`` wide."""

    height: int

    kind: ClassVar[str] = "triangle"
    size_name: ClassVar[str] = "height"

    @property
    def size(self) -> int:
        return self.height

    @property
    def dims(self) -> tuple[int, int]:
        return (self.height, max(0, 2 * self.height - 1))

    def resized(self, size: int) -> "Triangle":
        return Triangle(height=size)


@register_shape
@dataclass(frozen=True, slots=True)
class Line:
    """Horizontal line anchored at its left end."""

    length: int

    kind: ClassVar[str] = "line"
    size_name: ClassVar[str] = "length"

    @property
    def size(self) -> int:
        return self.length

    @property
    def dims(self) -> tuple[int, int]:
        return (self.length, 0)

    def resized(self, size: int) -> "Line":
        return Line(length=size)


Geometry = Union[Circle, Square, Triangle, Line]

# values.yml may narrow the enabled kinds; unknown names are ignored
for _kind in list(SHAPE_TYPES):
    if _kind not in SHAPE_KINDS:
        del SHAPE_TYPES[_kind]


def make_geometry(kind: str, size: int) -> Geometry:
    """Build the geometry registered under *kind* with its single size."""
    cls: Callable[[int], Geometry] | None = SHAPE_TYPES.get(kind.strip().lower())
    if cls is None:
        raise ValueError(
            f"unknown shape type {kind!r}: must be one of " + ", ".join(SHAPE_TYPES)
        )
    return cls(int(size))


@dataclass(frozen=True, slots=True)
class PlacedShape:
    """Registry entry: geometry plus placement and color metadata."""

    id: int
    geometry: Geometry
    anchor: Anchor
    outline: str
    fill: str = DEFAULT_COLOR
    filled: bool = False

    @property
    def kind(self) -> str:
        return self.geometry.kind

    def same_footprint(self, other: "PlacedShape") -> bool:
        """True when both entries share kind, dims and anchor (color ignored)."""
        return (
            self.kind == other.kind
            and self.geometry.dims == other.geometry.dims
            and self.anchor == other.anchor
        )

    def with_changes(self, **changes: object) -> "PlacedShape":
        return replace(self, **changes)  # type: ignore[arg-type]
