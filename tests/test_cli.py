from __future__ import annotations

import io
from pathlib import Path

import pytest

from gridsketch import __version__, cli
from gridsketch.app.commands import CommandDispatcher
from gridsketch.core.registry import ShapeRegistry
from gridsketch.settings.store import SettingsStore


def test_parse_args() -> None:
    args = cli.parse_args(["--width", "40", "--height", "12", "--load", "a.txt"])
    assert (args.width, args.height) == (40, 12)
    assert args.load == "a.txt"
    assert args.scale is None
    assert args.log_level == "WARNING"


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["--version"])
    assert capsys.readouterr().out.strip() == f"GridSketch {__version__}"


def test_run_loop_stops_at_exit() -> None:
    cmd = CommandDispatcher(ShapeRegistry.with_text_canvas(20, 5))
    stream = io.StringIO("line 0 0 3\nbogus\nexit\nline 0 1 3\n")
    out = io.StringIO()
    failures = cli.run_loop(cmd, stream, out, prompt="> ")
    assert failures == 1
    assert len(cmd.registry) == 1
    assert out.getvalue().startswith("> added line 1 at (0, 0)\n")


def test_main_runs_script(
    tmp_path: Path, gridsketch_home: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    script = tmp_path / "cmds.txt"
    saved = tmp_path / "out.txt"
    script.write_text(f"triangle 5 1 3\ndraw\nsave {saved}\nexit\n")
    cli.main(["--script", str(script), "--width", "20", "--height", "6"])
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "added triangle 1 at (5, 1)"
    canvas = out[1:7]
    assert len(canvas) == 6 and all(len(row) == 20 for row in canvas)
    assert canvas[3].rstrip() == "   *****"
    assert saved.read_text() == "1 triangle 5 1 3 5 * -\n"


def test_main_loads_file(
    tmp_path: Path,
    gridsketch_home: Path,
    fixtures_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    script = tmp_path / "cmds.txt"
    script.write_text("list\n")
    cli.main(
        [
            "--script",
            str(script),
            "--height",
            "40",
            "--load",
            str(fixtures_dir / "drawing.txt"),
        ]
    )
    captured = capsys.readouterr()
    assert "loaded 3 shapes" in captured.err
    assert captured.out.splitlines()[0].startswith("3: circle radius=3")


def test_main_save_settings(tmp_path: Path, gridsketch_home: Path) -> None:
    script = tmp_path / "cmds.txt"
    script.write_text("")
    cli.main(["--script", str(script), "--width", "33", "--save-settings"])
    assert SettingsStore.load().width == 33


def test_main_rejects_bad_size(gridsketch_home: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        cli.main(["--width", "0"])
    assert ei.value.code == 2


def test_run_loop_survives_bad_save_path() -> None:
    cmd = CommandDispatcher(ShapeRegistry.with_text_canvas(20, 5))
    stream = io.StringIO("line 0 0 3\nsave /\ndraw\n")
    out = io.StringIO()
    failures = cli.run_loop(cmd, stream, out)
    assert failures == 1
    lines = out.getvalue().splitlines()
    assert lines[1].startswith("cannot write /")
    assert lines[2] == "***" + " " * 17
