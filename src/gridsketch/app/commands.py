"""Line-oriented command dispatcher.

Each text command maps onto exactly one registry or canvas operation. The
dispatcher only parses arguments and formats results; all validation of
shapes, colors and ids happens in :class:`~gridsketch.core.registry.ShapeRegistry`.

Example usage:

    from gridsketch.app.commands import CommandDispatcher
    from gridsketch.core.registry import ShapeRegistry

    reg = ShapeRegistry.with_text_canvas(80, 25)
    cmd = CommandDispatcher(reg)
    cmd.execute("triangle 10 2 4 red")
    print("\\n".join(cmd.execute("draw").lines))
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from typing import Callable

from gridsketch.core.registry import ShapeRegistry
from gridsketch.core.results import OpResult
from gridsketch.core.shapes import SHAPE_TYPES, make_geometry
from gridsketch.data.records import load_registry, save_registry
from gridsketch.settings.values import COLOR_ORDER

__all__ = ["CommandOutcome", "CommandDispatcher"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandOutcome:
    ok: bool = True
    lines: list[str] = field(default_factory=list)
    quit: bool = False

    @classmethod
    def from_result(cls, res: OpResult) -> "CommandOutcome":
        return cls(ok=res.ok, lines=[res.message])

    @classmethod
    def error(cls, message: str) -> "CommandOutcome":
        return cls(ok=False, lines=[message])


Handler = Callable[[list[str]], CommandOutcome]


class _UsageError(ValueError):
    pass


def _ints(args: list[str], names: tuple[str, ...]) -> list[int]:
    out: list[int] = []
    for name, raw in zip(names, args):
        try:
            out.append(int(raw))
        except ValueError:
            raise _UsageError(f"{name} must be an integer, got {raw!r}") from None
    return out


class CommandDispatcher:
    """Parse one command line and run it against a registry."""

    def __init__(
        self, registry: ShapeRegistry, *, default_outline: str = COLOR_ORDER[0]
    ) -> None:
        self.registry = registry
        self.default_outline = default_outline
        self._handlers: dict[str, tuple[str, Handler]] = {
            "draw": ("", self._draw),
            "list": ("", self._list),
            "shapes": ("", self._list),
            "remove": ("ID", self._remove),
            "undo": ("", self._undo),
            "move": ("ID X Y", self._move),
            "paint": ("ID OUTLINE [FILL]", self._paint),
            "edit": ("ID PROPERTY VALUE", self._edit),
            "clear": ("", self._clear),
            "save": ("PATH", self._save),
            "load": ("PATH", self._load),
            "help": ("", self._help),
            "exit": ("", self._exit),
            "quit": ("", self._exit),
        }
        for kind in SHAPE_TYPES:
            self._handlers[kind] = (
                "X Y SIZE [OUTLINE] [FILL]",
                self._make_shape_handler(kind),
            )

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def execute(self, line: str) -> CommandOutcome:
        try:
            parts = shlex.split(line, comments=True)
        except ValueError as e:
            return CommandOutcome.error(f"cannot parse command: {e}")
        if not parts:
            return CommandOutcome(lines=[])
        name, args = parts[0].lower(), parts[1:]
        entry = self._handlers.get(name)
        if entry is None:
            logger.info("unknown command %r", name)
            return CommandOutcome.error(
                f"unknown command {name!r}; type 'help' for a list"
            )
        usage, handler = entry
        try:
            return handler(args)
        except _UsageError as e:
            return CommandOutcome.error(f"{e}\nusage: {name} {usage}".rstrip())

    # ------------------------------------------------------------------
    def _arity(self, args: list[str], lo: int, hi: int | None = None) -> None:
        hi = lo if hi is None else hi
        if not lo <= len(args) <= hi:
            want = str(lo) if lo == hi else f"{lo} to {hi}"
            raise _UsageError(f"expected {want} arguments, got {len(args)}")

    def _make_shape_handler(self, kind: str) -> Handler:
        def _handler(args: list[str]) -> CommandOutcome:
            self._arity(args, 3, 5)
            x, y, size = _ints(args[:3], ("x", "y", "size"))
            outline = args[3] if len(args) > 3 else self.default_outline
            fill = args[4] if len(args) > 4 else None
            g = make_geometry(kind, size)
            return CommandOutcome.from_result(
                self.registry.add(g, (x, y), outline=outline, fill=fill)
            )

        return _handler

    def _draw(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 0)
        return CommandOutcome(lines=list(self.registry.render()))

    def _list(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 0)
        return CommandOutcome(lines=self.registry.describe() or ["no shapes"])

    def _remove(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 1)
        (shape_id,) = _ints(args, ("id",))
        return CommandOutcome.from_result(self.registry.remove(shape_id))

    def _undo(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 0)
        return CommandOutcome.from_result(self.registry.undo())

    def _move(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 3)
        shape_id, x, y = _ints(args, ("id", "x", "y"))
        return CommandOutcome.from_result(self.registry.move(shape_id, (x, y)))

    def _paint(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 2, 3)
        (shape_id,) = _ints(args[:1], ("id",))
        fill = args[2] if len(args) > 2 else None
        return CommandOutcome.from_result(
            self.registry.recolor(shape_id, args[1], fill)
        )

    def _edit(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 3)
        (shape_id,) = _ints(args[:1], ("id",))
        return CommandOutcome.from_result(
            self.registry.edit(shape_id, args[1], args[2])
        )

    def _clear(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 0)
        return CommandOutcome.from_result(self.registry.clear())

    def _save(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 1)
        return CommandOutcome.from_result(save_registry(self.registry, args[0]))

    def _load(self, args: list[str]) -> CommandOutcome:
        self._arity(args, 1)
        report = load_registry(self.registry, args[0])
        out = CommandOutcome.from_result(report.to_result())
        out.lines.extend(f"  skipped {s}" for s in report.skipped)
        return out

    def _help(self, args: list[str]) -> CommandOutcome:
        lines = [
            f"{name} {usage}".rstrip()
            for name, (usage, _h) in sorted(self._handlers.items())
        ]
        lines.append("colors: " + ", ".join(COLOR_ORDER))
        return CommandOutcome(lines=lines)

    def _exit(self, args: list[str]) -> CommandOutcome:
        return CommandOutcome(quit=True)
