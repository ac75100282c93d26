"""Zone marker types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ZoneKind(str, Enum):
    """OSC 133 zone letters."""

    PROMPT_START = "A"
    INPUT_START = "B"
    OUTPUT_START = "C"
    OUTPUT_END = "D"


class Direction(int, Enum):
    """Cell navigation direction."""

    FORWARD = 1
    BACKWARD = -1

    def reversed(self) -> Direction:
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD


@dataclass(frozen=True)
class Marker:
    """A recorded zone marker bound to a buffer anchor.

    ``seq`` is the arrival order within its context and breaks ties between
    markers that resolve to the same position.
    """

    kind: ZoneKind
    anchor_id: int
    seq: int


@dataclass(frozen=True)
class ResolvedMarker:
    """A marker with its anchor resolved to a concrete ``(row, col)``."""

    kind: ZoneKind
    row: int
    col: int
    seq: int
