"""Per-buffer zone marker storage."""

import logging

from semzones.buffer import LineBuffer
from semzones.models import Direction, Marker, ResolvedMarker, ZoneKind

log = logging.getLogger(__name__)


class ZoneContext:
    """Markers and navigation memory for one buffer.

    Markers are kept in arrival order; positions are only read when
    :meth:`resolve_positions` is called, so anchors are free to move in the
    meantime.
    """

    def __init__(self, buffer: LineBuffer):
        self.buffer = buffer
        self.markers: list[Marker] = []
        self.last_direction: Direction | None = None
        self._seq = 0

    def record_zone(self, kind: ZoneKind, row: int) -> Marker:
        """Anchor a new marker of *kind* at column 0 of *row*."""
        anchor_id = self.buffer.set_anchor(row, 0, right_gravity=False)
        marker = Marker(kind=kind, anchor_id=anchor_id, seq=self._seq)
        self._seq += 1
        self.markers.append(marker)
        log.debug("recorded %s at row %d (anchor %d)", kind.name, row, anchor_id)
        return marker

    def resolve_positions(self) -> list[ResolvedMarker]:
        """Resolve every live marker and return them sorted by position.

        Markers whose anchor no longer resolves are skipped but stay in the
        collection until :meth:`prune` or :meth:`clear`. Ties on ``(row, col)``
        keep arrival order.
        """
        resolved = []
        for marker in self.markers:
            pos = self.buffer.get_anchor(marker.anchor_id)
            if pos is None:
                continue
            row, col = pos
            resolved.append(ResolvedMarker(kind=marker.kind, row=row, col=col, seq=marker.seq))
        resolved.sort(key=lambda m: (m.row, m.col, m.seq))
        return resolved

    def prune(self) -> int:
        """Drop markers whose anchors were discarded. Returns the count removed."""
        live = []
        for marker in self.markers:
            if self.buffer.get_anchor(marker.anchor_id) is None:
                self.buffer.del_anchor(marker.anchor_id)
            else:
                live.append(marker)
        removed = len(self.markers) - len(live)
        self.markers = live
        if removed:
            log.debug("pruned %d dead marker(s)", removed)
        return removed

    def clear(self) -> None:
        """Release all anchors and forget the last navigation direction."""
        for marker in self.markers:
            self.buffer.del_anchor(marker.anchor_id)
        self.markers = []
        self.last_direction = None


class ZoneRegistry:
    """Maps buffers to their :class:`ZoneContext`.

    Buffers are keyed by identity. :meth:`attach` is the only place contexts
    are constructed; :meth:`context` falls back to it for buffers that were
    never attached or were detached earlier.
    """

    def __init__(self) -> None:
        self._contexts: dict[LineBuffer, ZoneContext] = {}

    def __contains__(self, buffer: LineBuffer) -> bool:
        return buffer in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)

    def attach(self, buffer: LineBuffer) -> ZoneContext:
        """Create (or return the existing) context for *buffer*."""
        ctx = self._contexts.get(buffer)
        if ctx is None:
            ctx = ZoneContext(buffer)
            self._contexts[buffer] = ctx
            log.debug("attached %r", buffer)
        return ctx

    def context(self, buffer: LineBuffer) -> ZoneContext:
        ctx = self._contexts.get(buffer)
        if ctx is None:
            ctx = self.attach(buffer)
        return ctx

    def detach(self, buffer: LineBuffer) -> None:
        """Release the context for *buffer*. Unknown buffers are ignored."""
        ctx = self._contexts.pop(buffer, None)
        if ctx is not None:
            ctx.clear()
            log.debug("detached %r", buffer)
