"""Scrolling line buffer with position anchors that follow edits."""

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass
class _Anchor:
    row: int
    col: int
    right_gravity: bool


class LineBuffer:
    """Append-oriented list of text lines with edit-tracking anchors.

    An anchor is bound to a line when created and keeps pointing at that line
    as lines are inserted or deleted elsewhere. Deleting the anchor's own line
    discards it. Anchors default to left gravity: lines inserted exactly at
    the anchor's row go below it rather than pushing it down.

    Args:
        max_lines: Scrollback limit. When appending pushes the buffer past
            this many lines, the oldest lines are deleted from the top.
    """

    def __init__(self, max_lines: int | None = None):
        if max_lines is not None and max_lines < 1:
            raise ValueError(f"max_lines must be positive, got {max_lines}")
        self.max_lines = max_lines
        self._lines: list[str] = [""]
        self._anchors: dict[int, _Anchor] = {}
        self._next_id = 1
        # Total anchors discarded because their line was deleted.
        self.discarded_anchors = 0

    def __repr__(self) -> str:
        return f"LineBuffer(lines={len(self._lines)}, anchors={len(self._anchors)})"

    # -- text -------------------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def cursor_row(self) -> int:
        """Row of the write line (always the last line)."""
        return len(self._lines) - 1

    def get_lines(self, start: int = 0, end: int | None = None) -> list[str]:
        """Return lines ``[start, end)``; *end* defaults to the buffer end."""
        return self._lines[max(start, 0) : end]

    def append_text(self, text: str) -> None:
        """Append plain *text* at the end of the buffer; ``\\n`` starts a new line.

        Control characters are stored as-is. Raw terminal output goes through
        :class:`semzones.session.TerminalSession`, which renders it first.
        """
        pieces = text.split("\n")
        self._lines[-1] += pieces[0]
        self._lines.extend(pieces[1:])
        self._trim_scrollback()

    def set_line(self, row: int, text: str) -> None:
        """Replace the text of *row*. Anchors on the line are unaffected."""
        self._lines[row] = text

    def insert_lines(self, row: int, lines: list[str]) -> None:
        """Insert *lines* before *row*, shifting anchors below."""
        if not lines:
            return
        row = min(max(row, 0), len(self._lines))
        self._lines[row:row] = lines
        count = len(lines)
        for anchor in self._anchors.values():
            if anchor.row > row or (anchor.row == row and anchor.right_gravity):
                anchor.row += count
        self._trim_scrollback()

    def delete_lines(self, start: int, end: int) -> None:
        """Delete lines ``[start, end)``.

        Anchors on deleted lines are discarded; anchors after them move up.
        """
        start = max(start, 0)
        end = min(end, len(self._lines))
        if start >= end:
            return
        del self._lines[start:end]
        if not self._lines:
            self._lines.append("")
        count = end - start
        dead = []
        for anchor_id, anchor in self._anchors.items():
            if start <= anchor.row < end:
                dead.append(anchor_id)
            elif anchor.row >= end:
                anchor.row -= count
        for anchor_id in dead:
            del self._anchors[anchor_id]
        if dead:
            self.discarded_anchors += len(dead)
            log.debug("deleted lines [%d, %d) discarded %d anchor(s)", start, end, len(dead))

    def _trim_scrollback(self) -> None:
        if self.max_lines is None:
            return
        overflow = len(self._lines) - self.max_lines
        if overflow > 0:
            self.delete_lines(0, overflow)

    # -- anchors ----------------------------------------------------------

    def set_anchor(self, row: int, col: int = 0, *, right_gravity: bool = False) -> int:
        """Create an anchor at ``(row, col)`` and return its id.

        *row* is clamped to the existing lines.
        """
        row = min(max(row, 0), len(self._lines) - 1)
        anchor_id = self._next_id
        self._next_id += 1
        self._anchors[anchor_id] = _Anchor(row=row, col=max(col, 0), right_gravity=right_gravity)
        return anchor_id

    def get_anchor(self, anchor_id: int) -> tuple[int, int] | None:
        """Return the anchor's current ``(row, col)``, or ``None`` if it is gone."""
        anchor = self._anchors.get(anchor_id)
        if anchor is None:
            return None
        return anchor.row, anchor.col

    def del_anchor(self, anchor_id: int) -> None:
        """Release an anchor. Unknown ids are ignored."""
        self._anchors.pop(anchor_id, None)

    @property
    def anchor_count(self) -> int:
        return len(self._anchors)
