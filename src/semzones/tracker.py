"""Public entry point tying parsing, storage, cells and navigation together."""

import logging

from semzones.buffer import LineBuffer
from semzones.cells import Cell, build_cells
from semzones.cells import cell_at_row as _cell_at_row
from semzones.models import Direction, ZoneKind
from semzones.navigation import Zone, ZoneRange, find_target
from semzones.navigation import zone_range as _zone_range
from semzones.parser import parse_osc133
from semzones.store import ZoneContext, ZoneRegistry

log = logging.getLogger(__name__)

# Logical actions a host can bind to triggers. See semzones.config.
ACTIONS: dict[str, str] = {
    "next_cell": "navigate forward",
    "prev_cell": "navigate backward",
    "repeat_fwd": "repeat last navigation",
    "repeat_back": "repeat last navigation reversed",
    "yank_input": "zone_text input",
    "yank_output": "zone_text output",
    "yank_cell": "zone_text cell",
    "select_input": "zone_range input",
    "select_output": "zone_range output",
    "select_cell": "zone_range cell",
}


class ZoneTracker:
    """Tracks OSC 133 zones for any number of independent buffers.

    Every query rebuilds cells from the current anchor positions, so results
    always reflect edits made to the buffer since the markers were recorded.
    """

    def __init__(self, registry: ZoneRegistry | None = None):
        self.registry = registry if registry is not None else ZoneRegistry()

    def attach(self, buffer: LineBuffer) -> ZoneContext:
        return self.registry.attach(buffer)

    def detach(self, buffer: LineBuffer) -> None:
        self.registry.detach(buffer)

    def on_raw_sequence(
        self, buffer: LineBuffer, raw: str | bytes | None, row: int | None = None
    ) -> ZoneKind | None:
        """Record a marker for *raw* if it is an OSC 133 zone sequence.

        Args:
            buffer: Buffer the sequence was emitted into.
            raw: Raw control sequence from the transport.
            row: Line to anchor the marker to; defaults to the buffer's
                current write line.

        Returns:
            The recorded zone kind, or ``None`` if *raw* was not a zone marker.
        """
        kind = parse_osc133(raw)
        if kind is None:
            return None
        if row is None:
            row = buffer.cursor_row
        self.registry.context(buffer).record_zone(kind, row)
        return kind

    def cells(self, buffer: LineBuffer) -> list[Cell]:
        return build_cells(self.registry.context(buffer).resolve_positions())

    def cell_at_row(self, buffer: LineBuffer, row: int) -> Cell | None:
        return _cell_at_row(self.cells(buffer), row)

    def clear(self, buffer: LineBuffer) -> None:
        """Forget every marker and the navigation direction for *buffer*."""
        self.registry.context(buffer).clear()

    def prune(self, buffer: LineBuffer) -> int:
        return self.registry.context(buffer).prune()

    def navigate(self, buffer: LineBuffer, direction: Direction, cursor_row: int) -> int | None:
        """Return the prompt row of the next/previous cell from *cursor_row*.

        The direction is remembered for :meth:`repeat` even when there is no
        cell to jump to. With no cells at all this is a no-op.
        """
        direction = Direction(direction)
        ctx = self.registry.context(buffer)
        cells = build_cells(ctx.resolve_positions())
        if not cells:
            return None
        target = find_target(cells, direction, cursor_row)
        ctx.last_direction = direction
        if target is None:
            log.debug("no cell %s of row %d", direction.name.lower(), cursor_row)
            return None
        return target.start_row

    def repeat(self, buffer: LineBuffer, cursor_row: int, reverse: bool = False) -> int | None:
        """Repeat the last navigation, optionally in the opposite direction."""
        direction = self.registry.context(buffer).last_direction
        if direction is None:
            return None
        if reverse:
            direction = direction.reversed()
        return self.navigate(buffer, direction, cursor_row)

    def zone_range(self, buffer: LineBuffer, zone: Zone, cursor_row: int) -> ZoneRange | None:
        """Return the range of *zone* in the cell owning *cursor_row*.

        ``None`` means there is no cell at the cursor or the zone's bounding
        markers are missing. An empty ``ZoneRange`` means there is nothing to
        select.
        """
        cell = self.cell_at_row(buffer, cursor_row)
        if cell is None:
            log.debug("no cell at row %d", cursor_row)
            return None
        return _zone_range(cell, zone)

    def zone_text(self, buffer: LineBuffer, zone: Zone, cursor_row: int) -> list[str] | None:
        """Return the lines of *zone* in the cell owning *cursor_row*."""
        rng = self.zone_range(buffer, zone, cursor_row)
        if rng is None:
            return None
        if rng.is_empty:
            return []
        return buffer.get_lines(rng.start, rng.end)
