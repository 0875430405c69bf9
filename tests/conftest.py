from __future__ import annotations

from pathlib import Path

import pytest

from gridsketch.core.registry import ShapeRegistry


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def registry() -> ShapeRegistry:
    """Session on an 80x80 canvas with the default 2:1 cell aspect."""
    return ShapeRegistry.with_text_canvas(80, 80)


@pytest.fixture
def gridsketch_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("GRIDSKETCH_HOME", str(tmp_path))
    return tmp_path
