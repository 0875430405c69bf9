from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from gridsketch.config import make_runtime_config
from gridsketch.settings.schema import Settings
from gridsketch.settings.store import SettingsStore


def test_defaults_from_store(gridsketch_home: Path) -> None:
    SettingsStore.save(Settings(width=50, prompt="$ "))
    cfg = make_runtime_config()
    assert cfg.canvas.width == 50
    assert cfg.canvas.height == 25
    assert cfg.prompt == "$ "
    assert cfg.default_outline == "default"


def test_cli_overrides() -> None:
    args = argparse.Namespace(width=30, height=None, scale=1.0)
    cfg = make_runtime_config(args=args, settings=Settings(height=40))
    assert (cfg.canvas.width, cfg.canvas.height) == (30, 40)
    assert cfg.canvas.aspect_scale == 1.0


def test_invalid_override_raises() -> None:
    args = argparse.Namespace(width=0, height=None, scale=None)
    with pytest.raises(ValueError):
        make_runtime_config(args=args, settings=Settings())
