"""Plain-text persistence of the shape registry.

One record per line, whitespace separated::

    id type x y dim1 dim2 outline fill

``dim2`` is 0 for circles and lines, the side again for squares and the base
width for triangles; it is written for readers of the file and ignored on
load. ``fill`` is a palette character for filled shapes and ``-`` for
outline-only ones. Blank lines and ``#`` comments are ignored.

Loading is all-or-nothing with respect to the file: it is read and decoded
completely before the registry is replaced, so an unreadable file leaves the
session untouched. Individual malformed records are skipped and reported.
Saving writes a temporary file next to the target and renames it over the
target.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from gridsketch.core.colors import DEFAULT_COLOR, is_palette_char
from gridsketch.core.registry import ShapeRegistry
from gridsketch.core.results import OpResult
from gridsketch.core.shapes import SHAPE_TYPES, PlacedShape, make_geometry
from gridsketch.settings.values import UNFILLED_MARKER

__all__ = [
    "ShapeRecord",
    "LoadReport",
    "RecordError",
    "parse_lines",
    "format_records",
    "save_registry",
    "load_registry",
]

logger = logging.getLogger(__name__)

_FIELDS = ("id", "type", "x", "y", "dim1", "dim2", "outline", "fill")


class RecordError(ValueError):
    def __init__(self, lineno: int, reason: str) -> None:
        super().__init__(f"line {lineno}: {reason}")
        self.lineno = lineno
        self.reason = reason


class ShapeRecord(BaseModel):
    """One persisted registry entry."""

    id: int = Field(..., gt=0)
    type: str
    x: int
    y: int
    dim1: int = Field(..., gt=0, description="Radius, side, height or length")
    dim2: int = Field(0, ge=0, description="Informational second dimension")
    outline: str
    fill: str = UNFILLED_MARKER

    @field_validator("type")
    @classmethod
    def _chk_type(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SHAPE_TYPES:
            raise ValueError(
                "unknown shape type: must be one of " + ", ".join(SHAPE_TYPES)
            )
        return v

    @field_validator("outline")
    @classmethod
    def _chk_outline(cls, v: str) -> str:
        if not is_palette_char(v):
            raise ValueError(f"unsupported outline color {v!r}")
        return v

    @field_validator("fill")
    @classmethod
    def _chk_fill(cls, v: str) -> str:
        if v != UNFILLED_MARKER and not is_palette_char(v):
            raise ValueError(f"unsupported fill color {v!r}")
        return v

    @classmethod
    def from_shape(cls, s: PlacedShape) -> "ShapeRecord":
        dim1, dim2 = s.geometry.dims
        return cls(
            id=s.id,
            type=s.kind,
            x=s.anchor[0],
            y=s.anchor[1],
            dim1=dim1,
            dim2=dim2,
            outline=s.outline,
            fill=s.fill if s.filled else UNFILLED_MARKER,
        )

    @classmethod
    def from_line(cls, line: str, lineno: int = 0) -> "ShapeRecord":
        parts = line.split()
        if len(parts) != len(_FIELDS):
            raise RecordError(
                lineno, f"expected {len(_FIELDS)} fields, got {len(parts)}"
            )
        try:
            return cls.model_validate(dict(zip(_FIELDS, parts)))
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise RecordError(lineno, reasons) from None

    def to_line(self) -> str:
        return " ".join(str(getattr(self, f)) for f in _FIELDS)

    def to_shape(self) -> PlacedShape:
        filled = self.fill != UNFILLED_MARKER
        return PlacedShape(
            id=self.id,
            geometry=make_geometry(self.type, self.dim1),
            anchor=(self.x, self.y),
            outline=self.outline,
            fill=self.fill if filled else DEFAULT_COLOR,
            filled=filled,
        )


@dataclass(slots=True)
class LoadReport:
    ok: bool
    message: str
    loaded: int = 0
    skipped: list[str] = field(default_factory=list)

    def to_result(self) -> OpResult:
        if self.ok:
            return OpResult.success(self.message)
        return OpResult.failure("io_error", self.message)


def parse_lines(lines: list[str]) -> tuple[list[ShapeRecord], list[str]]:
    """Decode record lines, returning (records, skip messages)."""
    records: list[ShapeRecord] = []
    skipped: list[str] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            records.append(ShapeRecord.from_line(line, lineno))
        except RecordError as e:
            logger.warning("skipping record %s", e)
            skipped.append(str(e))
    return records, skipped


def format_records(registry: ShapeRegistry) -> list[str]:
    return [ShapeRecord.from_shape(s).to_line() for s in registry]


def save_registry(registry: ShapeRegistry, path: str | os.PathLike[str]) -> OpResult:
    """Atomically write every entry of *registry* to *path*."""
    p = Path(path)
    if not p.name:
        logger.error("failed to save %s: not a file path", p)
        return OpResult.failure("io_error", f"cannot write {p}: not a file path")
    tmp = p.with_name(p.name + ".tmp")
    body = "".join(line + "\n" for line in format_records(registry))
    try:
        tmp.write_text(body, encoding="utf-8")
        os.replace(tmp, p)
    except (OSError, ValueError) as e:
        # ValueError: the path holds a NUL byte
        logger.error("failed to save %s: %s", p, e)
        try:
            tmp.unlink(missing_ok=True)
        except (OSError, ValueError):
            logger.debug("could not remove %s", tmp, exc_info=True)
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        return OpResult.failure("io_error", f"cannot write {p}: {reason}")
    logger.info("saved %d shapes to %s", len(registry), p)
    return OpResult.success(f"saved {len(registry)} shapes to {p}")


def load_registry(registry: ShapeRegistry, path: str | os.PathLike[str]) -> LoadReport:
    """Replace the contents of *registry* with the records stored at *path*.

    On a read failure the registry and its canvas are left untouched.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        # ValueError covers undecodable text and NUL bytes in the path
        logger.error("failed to read %s: %s", p, e)
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        return LoadReport(ok=False, message=f"cannot read {p}: {reason}")

    records, skipped = parse_lines(text.splitlines())
    skipped.extend(registry.replace(r.to_shape() for r in records))
    loaded = len(registry)
    msg = f"loaded {loaded} shapes from {p}"
    if skipped:
        msg += f" ({len(skipped)} skipped)"
    logger.info("%s", msg)
    return LoadReport(ok=True, message=msg, loaded=loaded, skipped=skipped)
