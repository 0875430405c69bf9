"""Operation results returned at the registry boundary.

Registry and persistence operations never raise past their caller; they
report success or a classified failure with a human readable message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal[
    "out_of_bounds",
    "duplicate",
    "not_found",
    "occupied",
    "unsupported_color",
    "invalid_value",
    "unknown_property",
    "io_error",
]


@dataclass(frozen=True, slots=True)
class OpResult:
    ok: bool
    message: str
    error: ErrorKind | None = None
    shape_id: int | None = None

    @classmethod
    def success(cls, message: str, shape_id: int | None = None) -> "OpResult":
        return cls(ok=True, message=message, shape_id=shape_id)

    @classmethod
    def failure(
        cls, error: ErrorKind, message: str, shape_id: int | None = None
    ) -> "OpResult":
        return cls(ok=False, message=message, error=error, shape_id=shape_id)

    def __bool__(self) -> bool:
        return self.ok


__all__ = ["ErrorKind", "OpResult"]
