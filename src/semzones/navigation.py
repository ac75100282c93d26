"""Cell navigation targets and zone line ranges."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from semzones.cells import Cell
from semzones.models import Direction


class Zone(str, Enum):
    """Selectable parts of a cell."""

    INPUT = "input"
    OUTPUT = "output"
    CELL = "cell"


@dataclass(frozen=True)
class ZoneRange:
    """Rows ``[start, end)`` of a zone. Empty when ``start >= end``."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def __len__(self) -> int:
        return max(self.end - self.start, 0)


def find_target(cells: Sequence[Cell], direction: Direction, cursor_row: int) -> Cell | None:
    """Return the cell to jump to from *cursor_row*, or ``None`` at the edges.

    Forward picks the first cell starting strictly below the cursor, backward
    the last one starting strictly above it. There is no wraparound.
    """
    if Direction(direction) is Direction.FORWARD:
        return next((cell for cell in cells if cell.start_row > cursor_row), None)
    return next((cell for cell in reversed(cells) if cell.start_row < cursor_row), None)


def zone_range(cell: Cell, zone: Zone) -> ZoneRange | None:
    """Return the row range of *zone* within *cell*.

    Returns ``None`` when the markers bounding the zone are missing. Output
    needs both its start and end markers; a running command has no output
    range yet.
    """
    if zone is Zone.INPUT:
        start = cell.input_start or cell.prompt_start
        end = cell.output_start or cell.output_end
        if end is None:
            return None
        return ZoneRange(start.row, end.row)
    if zone is Zone.OUTPUT:
        if cell.output_start is None or cell.output_end is None:
            return None
        return ZoneRange(cell.output_start.row, cell.output_end.row)
    # Whole cell, including the line of the last marker seen.
    last = cell.output_end or cell.output_start or cell.input_start or cell.prompt_start
    return ZoneRange(cell.prompt_start.row, last.row + 1)
