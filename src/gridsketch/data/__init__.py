"""Persistence of the shape registry as plain-text records."""

from .records import (
    LoadReport,
    ShapeRecord,
    format_records,
    load_registry,
    parse_lines,
    save_registry,
)

__all__ = [
    "LoadReport",
    "ShapeRecord",
    "format_records",
    "load_registry",
    "parse_lines",
    "save_registry",
]
