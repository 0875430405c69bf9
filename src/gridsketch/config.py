"""Runtime configuration helpers.

Small aggregator that merges the packaged value defaults, the persisted
Settings store and optional CLI overrides into the ``RuntimeConfig`` a
session is built from.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from .settings.schema import Settings
from .settings.store import SettingsStore


@dataclass(slots=True)
class CanvasData:
    width: int
    height: int
    aspect_scale: float
    blank: str


@dataclass(slots=True)
class RuntimeConfig:
    canvas: CanvasData
    default_outline: str
    prompt: str


def make_runtime_config(
    *, args: Optional[object] = None, settings: Settings | None = None
) -> RuntimeConfig:
    """Build a RuntimeConfig from persisted settings and CLI overrides.

    Rules:
    - *settings* (or ``SettingsStore.load()`` when omitted) provide the
      user defaults.
    - CLI args (argparse.Namespace-like ``width``, ``height`` and ``scale``)
      override them for the current session. Overrides are re-validated
      through the Settings model; invalid overrides raise ``ValueError``.
    """
    if settings is None:
        settings = SettingsStore.load()

    overrides: dict[str, object] = {}
    if args is not None:
        for attr, field in (
            ("width", "width"),
            ("height", "height"),
            ("scale", "aspect_scale"),
        ):
            v = getattr(args, attr, None)
            if v is not None:
                overrides[field] = v
    if overrides:
        try:
            settings = Settings.model_validate(settings.model_dump() | overrides)
        except ValidationError as e:
            raise ValueError(str(e)) from None

    return RuntimeConfig(
        canvas=CanvasData(
            width=settings.width,
            height=settings.height,
            aspect_scale=settings.aspect_scale,
            blank=settings.blank,
        ),
        default_outline=settings.default_outline,
        prompt=settings.prompt,
    )
