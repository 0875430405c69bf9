"""Command-line interface for GridSketch.

Builds a session (registry + canvas) from the persisted settings and CLI
overrides, then runs a read-eval loop over stdin or a script file. Each
line is handed to :class:`gridsketch.app.commands.CommandDispatcher`; bad
commands print a message and the loop continues.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from pydantic import ValidationError

from gridsketch import __version__
from gridsketch.app.commands import CommandDispatcher
from gridsketch.config import RuntimeConfig, make_runtime_config
from gridsketch.core.registry import ShapeRegistry
from gridsketch.data.records import load_registry
from gridsketch.settings.schema import Settings
from gridsketch.settings.store import SettingsStore

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Accepting an ``argv`` list makes the parser testable programmatically.
    """
    p = argparse.ArgumentParser(description="GridSketch text-grid drawing tool")
    p.add_argument(
        "--width",
        type=int,
        default=None,
        help="Canvas width in characters (default: from settings, 80)",
    )
    p.add_argument(
        "--height",
        type=int,
        default=None,
        help="Canvas height in characters (default: from settings, 25)",
    )
    p.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Character cell aspect ratio used for circles and squares",
    )
    p.add_argument(
        "--load",
        type=str,
        default=None,
        help="Load shapes from a saved file before reading commands",
    )
    p.add_argument(
        "--script",
        type=str,
        default=None,
        help="Read commands from this file instead of stdin",
    )
    p.add_argument(
        "--save-settings",
        dest="save_settings",
        action="store_true",
        help="Persist the canvas overrides to the settings file",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_dispatcher(cfg: RuntimeConfig) -> CommandDispatcher:
    registry = ShapeRegistry.with_text_canvas(
        cfg.canvas.width,
        cfg.canvas.height,
        aspect_scale=cfg.canvas.aspect_scale,
        blank=cfg.canvas.blank,
    )
    return CommandDispatcher(registry, default_outline=cfg.default_outline)


def run_loop(
    dispatcher: CommandDispatcher,
    stream: TextIO,
    out: TextIO,
    *,
    prompt: str | None = None,
) -> int:
    """Execute commands from *stream* until EOF or ``exit``.

    Returns the number of commands that failed.
    """
    failures = 0
    while True:
        if prompt:
            out.write(prompt)
            out.flush()
        line = stream.readline()
        if not line:
            break
        outcome = dispatcher.execute(line)
        for text in outcome.lines:
            out.write(text + "\n")
        if not outcome.ok:
            failures += 1
        if outcome.quit:
            break
    return failures


def main(argv: list[str] | None = None) -> None:
    """Synchronous entrypoint for the GridSketch CLI."""
    args = parse_args(argv)

    if args.version:
        print(f"GridSketch {__version__}")
        return

    configure_logging(args.log_level)

    try:
        cfg = make_runtime_config(args=args)
    except ValueError as e:
        print(f"invalid settings: {e}", file=sys.stderr)
        raise SystemExit(2) from None

    if args.save_settings:
        try:
            SettingsStore.save(
                Settings(
                    width=cfg.canvas.width,
                    height=cfg.canvas.height,
                    aspect_scale=cfg.canvas.aspect_scale,
                    blank=cfg.canvas.blank,
                    default_outline=cfg.default_outline,
                    prompt=cfg.prompt,
                )
            )
        except (OSError, ValidationError) as e:
            logger.error("could not save settings: %s", e)

    dispatcher = build_dispatcher(cfg)

    if args.load:
        report = load_registry(dispatcher.registry, args.load)
        print(report.message, file=sys.stderr)

    try:
        if args.script:
            with open(args.script, "r", encoding="utf-8") as f:
                run_loop(dispatcher, f, sys.stdout)
        else:
            prompt = cfg.prompt if sys.stdin.isatty() else None
            run_loop(dispatcher, sys.stdin, sys.stdout, prompt=prompt)
    except KeyboardInterrupt:
        # Allow graceful exit via Ctrl+C
        pass
    except OSError as e:
        print(f"cannot read commands: {e}", file=sys.stderr)
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
