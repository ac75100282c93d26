"""Group resolved zone markers into command cells."""

import bisect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from semzones.models import ResolvedMarker, ZoneKind

log = logging.getLogger(__name__)


@dataclass
class Cell:
    """One prompt -> input -> output -> end command cycle.

    Only ``prompt_start`` is guaranteed. A cell without ``output_end`` is
    still open (the command is running, or the shell never reported the end).
    """

    prompt_start: ResolvedMarker
    input_start: ResolvedMarker | None = None
    output_start: ResolvedMarker | None = None
    output_end: ResolvedMarker | None = None

    @property
    def start_row(self) -> int:
        return self.prompt_start.row

    @property
    def is_complete(self) -> bool:
        return self.output_end is not None


_FIELDS = {
    ZoneKind.INPUT_START: "input_start",
    ZoneKind.OUTPUT_START: "output_start",
}


def build_cells(markers: Iterable[ResolvedMarker]) -> list[Cell]:
    """Build cells from markers already sorted by position.

    A prompt start flushes whatever cell is open and begins a new one. An
    output end closes the current cell. Input/output starts overwrite the
    matching field of the current cell. Markers that arrive with no cell
    open are dropped.
    """
    cells: list[Cell] = []
    current: Cell | None = None
    dropped = 0
    for marker in markers:
        if marker.kind is ZoneKind.PROMPT_START:
            if current is not None:
                cells.append(current)
            current = Cell(prompt_start=marker)
        elif current is None:
            dropped += 1
        elif marker.kind is ZoneKind.OUTPUT_END:
            current.output_end = marker
            cells.append(current)
            current = None
        else:
            setattr(current, _FIELDS[marker.kind], marker)
    if current is not None:
        cells.append(current)
    if dropped:
        log.debug("dropped %d marker(s) outside any cell", dropped)
    return cells


def cell_at_row(cells: Sequence[Cell], row: int) -> Cell | None:
    """Return the last cell whose prompt starts at or before *row*."""
    index = bisect.bisect_right([cell.start_row for cell in cells], row)
    if index == 0:
        return None
    return cells[index - 1]
