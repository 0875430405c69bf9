"""Pydantic model for user settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .values import CANVAS_DEFAULTS, COLOR_CHARS, COLOR_ORDER


class Settings(BaseModel):
    """Session settings persisted to disk.

    Parameters
    ----------
    width, height: Canvas size in character cells. Fixed for the lifetime of
        a session.
    aspect_scale: Height/width ratio of a character cell. Circles and squares
        divide vertical extents by this value so they look round/square.
    blank: Character used for empty cells.
    default_outline: Color name used when a draw command omits the outline.
    prompt: Prompt printed by the interactive loop.
    """

    width: int = Field(default=int(CANVAS_DEFAULTS["width"]))
    height: int = Field(default=int(CANVAS_DEFAULTS["height"]))
    aspect_scale: float = Field(default=float(CANVAS_DEFAULTS["aspect_scale"]))
    blank: str = Field(default=str(CANVAS_DEFAULTS["blank"]))
    default_outline: str = Field(default=COLOR_ORDER[0])
    prompt: str = Field(default="> ")

    @field_validator("width", "height")
    @classmethod
    def _chk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("canvas dimensions must be > 0")
        return v

    @field_validator("aspect_scale")
    @classmethod
    def _chk_scale(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("aspect_scale must be > 0")
        return v

    @field_validator("blank")
    @classmethod
    def _chk_blank(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("blank must be a single character")
        if v in COLOR_CHARS.values():
            raise ValueError("blank must not be a palette character")
        return v

    @field_validator("default_outline")
    @classmethod
    def _chk_outline(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in COLOR_CHARS:
            raise ValueError("invalid color: must be one of " + ", ".join(COLOR_ORDER))
        return v
