from __future__ import annotations

from pathlib import Path

import pytest

from gridsketch.app.commands import CommandDispatcher
from gridsketch.core.registry import ShapeRegistry
from gridsketch.core.shapes import Circle, Square


@pytest.fixture
def cmd(registry: ShapeRegistry) -> CommandDispatcher:
    return CommandDispatcher(registry)


def test_triangle_then_draw(cmd: CommandDispatcher) -> None:
    out = cmd.execute("triangle 5 1 3")
    assert out.ok and out.lines == ["added triangle 1 at (5, 1)"]
    rows = cmd.execute("draw").lines
    assert len(rows) == 80
    assert rows[1].rstrip() == "     *"
    assert rows[2].rstrip() == "    * *"
    assert rows[3].rstrip() == "   *****"


def test_shape_commands_with_colors(cmd: CommandDispatcher) -> None:
    assert cmd.execute("circle 10 10 3 red blue").ok
    assert cmd.execute("square 30 5 4 green").ok
    assert cmd.execute("LINE 0 0 5").ok
    e = cmd.registry.get(1)
    assert e is not None and e.geometry == Circle(3) and e.filled and e.fill == "B"
    assert cmd.registry.get(2).geometry == Square(4)
    assert cmd.execute("list").lines == [
        "1: circle radius=3 at (10, 10) outline=red fill=blue",
        "2: square side=4 at (30, 5) outline=green fill=none",
        "3: line length=5 at (0, 0) outline=default fill=none",
    ]


def test_default_outline_from_settings(registry: ShapeRegistry) -> None:
    cmd = CommandDispatcher(registry, default_outline="green")
    cmd.execute("line 0 0 3")
    assert registry.render()[0][:3] == "GGG"


def test_rejections_are_reported(cmd: CommandDispatcher) -> None:
    cmd.execute("circle 10 10 3")
    out = cmd.execute("circle 10 10 3 red")
    assert not out.ok and "already exists" in out.lines[0]
    out = cmd.execute("circle 1 1 3")
    assert not out.ok and "does not fit" in out.lines[0]
    out = cmd.execute("remove 9")
    assert not out.ok and out.lines == ["shape 9 not found"]
    out = cmd.execute("paint 1 mauve")
    assert not out.ok and "unsupported color" in out.lines[0]


def test_move_edit_paint_undo_remove(cmd: CommandDispatcher) -> None:
    cmd.execute("square 5 5 3")
    cmd.execute("circle 30 10 2")
    out = cmd.execute("move 1 30 10")
    assert not out.ok and "occupied" in out.lines[0]
    assert cmd.execute("move 1 6 6").ok
    assert cmd.execute("edit 1 side 4").ok
    assert cmd.execute("paint 2 red green").ok
    assert cmd.registry.get(2).outline == "R"
    assert cmd.execute("undo").lines == ["undid circle 2"]
    assert cmd.execute("remove 1").ok
    assert cmd.execute("list").lines == ["no shapes"]


def test_usage_errors(cmd: CommandDispatcher) -> None:
    out = cmd.execute("circle 10 ten 3")
    assert not out.ok
    assert out.lines[0].startswith("y must be an integer")
    assert "usage: circle X Y SIZE" in out.lines[0]
    out = cmd.execute("move 1 2")
    assert not out.ok and "expected 3 arguments, got 2" in out.lines[0]
    out = cmd.execute("draw now")
    assert not out.ok


def test_unknown_and_empty(cmd: CommandDispatcher) -> None:
    out = cmd.execute("hexagon 1 2 3")
    assert not out.ok and "unknown command" in out.lines[0]
    assert cmd.execute("   ").lines == []
    assert cmd.execute("# just a comment").ok
    out = cmd.execute('save "unterminated')
    assert not out.ok and "cannot parse" in out.lines[0]


def test_save_and_load(cmd: CommandDispatcher, tmp_path: Path) -> None:
    cmd.execute("circle 10 10 3 red blue")
    cmd.execute("line 0 0 4")
    path = tmp_path / "pic.txt"
    assert cmd.execute(f"save {path}").ok
    cmd.execute("clear")
    assert cmd.registry.entries == ()
    out = cmd.execute(f"load {path}")
    assert out.ok and out.lines[0].startswith("loaded 2 shapes")
    assert len(cmd.registry) == 2


def test_load_reports_skipped(cmd: CommandDispatcher, fixtures_dir: Path) -> None:
    out = cmd.execute(f"load {fixtures_dir / 'mixed.txt'}")
    assert out.ok
    assert "(5 skipped)" in out.lines[0]
    assert sum(1 for ln in out.lines if ln.startswith("  skipped")) == 5


def test_load_missing(cmd: CommandDispatcher, tmp_path: Path) -> None:
    cmd.execute("line 0 0 4")
    out = cmd.execute(f"load {tmp_path / 'missing.txt'}")
    assert not out.ok
    assert len(cmd.registry) == 1


def test_help_and_exit(cmd: CommandDispatcher) -> None:
    lines = cmd.execute("help").lines
    assert "move ID X Y" in lines
    assert lines[-1] == "colors: default, red, blue, green"
    assert cmd.execute("exit").quit
    assert cmd.execute("quit").quit
    assert "triangle" in cmd.commands


@pytest.mark.parametrize("line", ["save /", "save .", 'save ""'])
def test_save_to_directory_is_reported(cmd: CommandDispatcher, line: str) -> None:
    cmd.execute("line 0 0 4")
    out = cmd.execute(line)
    assert not out.ok and out.lines[0].startswith("cannot write")
    assert len(cmd.registry) == 1
