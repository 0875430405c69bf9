"""Centralized value sets loaded from YAML.

This module provides a single place to access the color palette, the canvas
defaults and the shape kinds. The master source is ``values.yml`` in this
package.

On import we load and parse the YAML. Failures fall back to hard-coded
defaults so the application can still run; the fallbacks mirror the shipped
YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_COLOR_ORDER = ["default", "red", "blue", "green"]
_FALLBACK_COLOR_CHARS = {"default": "*", "red": "R", "blue": "B", "green": "G"}
_FALLBACK_CANVAS = {
    "width": 80,
    "height": 25,
    "aspect_scale": 2.0,
    "blank": " ",
}
_FALLBACK_SHAPE_KINDS = ["circle", "square", "triangle", "line"]
_FALLBACK_UNFILLED_MARKER = "-"


# --- Load YAML -----------------------------------------------------------
_color_order: List[str] = list(_FALLBACK_COLOR_ORDER)
_color_chars: Dict[str, str] = dict(_FALLBACK_COLOR_CHARS)
_canvas_defaults: Dict[str, Any] = dict(_FALLBACK_CANVAS)
_shape_kinds: List[str] = list(_FALLBACK_SHAPE_KINDS)
_unfilled_marker: str = _FALLBACK_UNFILLED_MARKER


def _is_cell_char(v: object) -> bool:
    return isinstance(v, str) and len(v) == 1


if _YAML_PATH.exists():  # pragma: no branch - simple path
    try:
        with _YAML_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        # Palette
        palette = raw.get("palette", {})
        if isinstance(palette, dict):
            chars = palette.get("chars")
            if isinstance(chars, dict):
                cleaned = {
                    str(k).lower(): v
                    for k, v in chars.items()
                    if _is_cell_char(v) and not str(v).isspace()
                }
                if cleaned:
                    _color_chars = cleaned
            order = palette.get("order")
            if isinstance(order, list) and all(isinstance(x, str) for x in order):
                _color_order = [x.lower() for x in order if x.lower() in _color_chars]
            # Colors missing from the order are appended in file order
            for name in _color_chars:
                if name not in _color_order:
                    _color_order.append(name)
        # Canvas
        canvas = raw.get("canvas", {})
        if isinstance(canvas, dict):
            for k in ("width", "height"):
                v = canvas.get(k)
                if isinstance(v, int) and v > 0:
                    _canvas_defaults[k] = v
            scale = canvas.get("aspect_scale")
            if isinstance(scale, (int, float)) and scale > 0:
                _canvas_defaults["aspect_scale"] = float(scale)
            blank = canvas.get("blank")
            if _is_cell_char(blank):
                _canvas_defaults["blank"] = blank
        # Shapes
        shapes = raw.get("shapes", {})
        if isinstance(shapes, dict):
            kinds = shapes.get("kinds")
            if isinstance(kinds, list) and all(isinstance(x, str) for x in kinds):
                _shape_kinds = [x.lower() for x in kinds]
        # Records
        records = raw.get("records", {})
        if isinstance(records, dict):
            marker = records.get("unfilled_marker")
            if _is_cell_char(marker) and marker not in _color_chars.values():
                _unfilled_marker = marker
    except (OSError, yaml.YAMLError) as e:  # pragma: no cover - parse guard
        logger.warning("failed to read %s, using defaults: %s", _YAML_PATH, e)

# --- Public accessors ----------------------------------------------------
COLOR_ORDER: Sequence[str] = tuple(_color_order)
COLOR_CHARS: Dict[str, str] = dict(_color_chars)
CANVAS_DEFAULTS: Dict[str, Any] = dict(_canvas_defaults)
SHAPE_KINDS: Sequence[str] = tuple(_shape_kinds)
UNFILLED_MARKER: str = _unfilled_marker

__all__ = [
    "COLOR_ORDER",
    "COLOR_CHARS",
    "CANVAS_DEFAULTS",
    "SHAPE_KINDS",
    "UNFILLED_MARKER",
]
