"""Color palette lookups.

Colors are a fixed enumeration of names, each drawn on the canvas with one
character. Lookups accept the name (case-insensitive) or the palette
character itself.
"""

from __future__ import annotations

from gridsketch.settings.values import COLOR_CHARS, COLOR_ORDER

__all__ = [
    "DEFAULT_COLOR",
    "UnsupportedColorError",
    "resolve_color",
    "color_name",
    "is_palette_char",
]

DEFAULT_COLOR = COLOR_CHARS[COLOR_ORDER[0]]

_CHAR_TO_NAME = {ch: name for name, ch in COLOR_CHARS.items()}


class UnsupportedColorError(ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(
            f"unsupported color {value!r}: must be one of " + ", ".join(COLOR_ORDER)
        )
        self.value = value


def resolve_color(value: str) -> str:
    """Return the palette character for a color name or character."""
    if not isinstance(value, str):
        raise UnsupportedColorError(value)
    v = value.strip()
    if v in _CHAR_TO_NAME:
        return v
    ch = COLOR_CHARS.get(v.lower())
    if ch is None:
        raise UnsupportedColorError(value)
    return ch


def color_name(ch: str) -> str:
    """Inverse of :func:`resolve_color` for display."""
    return _CHAR_TO_NAME.get(ch, ch)


def is_palette_char(ch: str) -> bool:
    return ch in _CHAR_TO_NAME
