"""Replay raw terminal output into a buffer and zone tracker."""

import codecs
import logging
import re

import pyte

from semzones.buffer import LineBuffer
from semzones.parser import iter_osc_sequences
from semzones.tracker import ZoneTracker

log = logging.getLogger(__name__)

# Width of the virtual line the text is rendered on. Wide enough that
# ordinary output is never truncated.
DEFAULT_COLUMNS = 1024

# Longest unterminated OSC sequence held back between chunks.
MAX_PENDING_OSC = 4096


# OSC introducer cut short by another escape sequence (or by the end of
# a segment that a complete OSC sequence follows).
_ABORTED_OSC_RE = re.compile(rb"\x1b\][^\x07\x1b]*(?=\x1b|\Z)")


def _drop_aborted(text: bytes) -> bytes:
    """Remove OSC sequences aborted before their terminator."""

    def _log(match: re.Match) -> bytes:
        log.debug("dropped malformed OSC sequence %r", match.group()[:32])
        return b""

    return _ABORTED_OSC_RE.sub(_log, text)


def _split_incomplete(tail: bytes) -> tuple[bytes, bytes]:
    """Split *tail* into text to render now and an unfinished OSC to hold back.

    Complete OSC sequences are consumed before this runs, so an OSC
    introducer left in *tail* has not been terminated. If nothing but a
    possible ST follows the last one, it is held back for the next chunk.
    Any other ESC inside it aborts the sequence and the aborted bytes are
    dropped. A lone trailing ESC is held back as well, since it may open an
    OSC sequence in the next chunk.
    """
    held = b""
    start = tail.rfind(b"\x1b]")
    if start != -1 and tail.find(b"\x1b", start + 2) in (-1, len(tail) - 1):
        tail, held = tail[:start], tail[start:]
        if len(held) > MAX_PENDING_OSC:
            log.debug("dropped unterminated OSC sequence %r", held[:32])
            held = b""
    elif tail.endswith(b"\x1b"):
        tail, held = tail[:-1], b"\x1b"
    return _drop_aborted(tail), held


class TerminalSession:
    """A terminal's output history with semantic zones.

    Bytes fed in are split into OSC sequences and text. Text is rendered one
    line at a time on a pyte screen, so carriage returns, cursor movement and
    line erases look the way a terminal shows them, and each rendered line is
    committed to the buffer. Each OSC sequence is offered to the tracker at
    the current write line, so zone markers are anchored where the shell
    emitted them.
    """

    def __init__(
        self,
        tracker: ZoneTracker | None = None,
        max_lines: int | None = None,
        columns: int = DEFAULT_COLUMNS,
    ):
        self.tracker = tracker if tracker is not None else ZoneTracker()
        self.buffer = LineBuffer(max_lines=max_lines)
        self.tracker.attach(self.buffer)
        self._screen = pyte.Screen(columns, 1)
        # Overlong lines overwrite the last column instead of wrapping away.
        self._screen.reset_mode(pyte.modes.DECAWM)
        self._stream = pyte.Stream(self._screen)
        self._pending = b""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._discarded_seen = 0

    def feed(self, data: bytes) -> None:
        """Process a chunk of PTY output.

        An OSC sequence split across chunks is held back until the rest of it
        arrives; other escape sequences are carried over by the pyte stream.
        """
        data = self._pending + data
        self._pending = b""
        pos = 0
        for start, end, sequence in iter_osc_sequences(data):
            self._write(_drop_aborted(data[pos:start]))
            kind = self.tracker.on_raw_sequence(self.buffer, sequence)
            if kind is None:
                log.debug("ignored OSC sequence %r", sequence[:32])
            pos = end
        text, self._pending = _split_incomplete(data[pos:])
        self._write(text)
        self._prune_scrolled_markers()

    def _write(self, chunk: bytes) -> None:
        if chunk:
            self._render(self._decoder.decode(chunk))

    def _render(self, text: str) -> None:
        pieces = text.split("\n")
        for index, piece in enumerate(pieces):
            if index:
                self.buffer.append_text("\n")
                self._screen.carriage_return()
                self._screen.erase_in_line(2)
            if piece:
                self._stream.feed(piece)
                self.buffer.set_line(self.buffer.cursor_row, self._screen.display[0].rstrip())

    def _prune_scrolled_markers(self) -> None:
        if self.buffer.discarded_anchors != self._discarded_seen:
            self._discarded_seen = self.buffer.discarded_anchors
            self.tracker.prune(self.buffer)

    def close(self) -> None:
        """Drop held-back bytes, flush the decoder and release the buffer's zones."""
        self._pending = b""
        self._render(self._decoder.decode(b"", final=True))
        self.tracker.detach(self.buffer)
