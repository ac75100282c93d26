"""OSC 133 escape-sequence parsing."""

import re
from collections.abc import Iterator

from semzones.models import ZoneKind

# ESC ] 133 ; X where X is the zone letter, optionally followed by ;<params>
# (e.g. the exit code in D;0) and terminated by BEL or ST.
_OSC133_RE = re.compile(r"\x1b\]133;([ABCD])(?=$|[;\x07\x1b])")
# Some transports strip the leading ESC before handing the payload over.
_BARE_OSC133_RE = re.compile(r"^\]133;([ABCD])(?=$|[;\x07\x1b])")

# Any OSC sequence in a raw PTY stream, terminated by BEL or ST (ESC \).
OSC_RE = re.compile(rb"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")


def parse_osc133(raw: str | bytes | None) -> ZoneKind | None:
    """Return the zone kind carried by an OSC 133 sequence.

    Args:
        raw: Raw control-sequence text as delivered by the transport.

    Returns:
        The matching ``ZoneKind``, or ``None`` when *raw* is empty or is not
        an OSC 133 A/B/C/D record.
    """
    if not raw:
        return None
    if isinstance(raw, bytes):
        raw = raw.decode(errors="replace")
    match = _OSC133_RE.search(raw) or _BARE_OSC133_RE.match(raw)
    if match is None:
        return None
    return ZoneKind(match.group(1))


def iter_osc_sequences(data: bytes) -> Iterator[tuple[int, int, bytes]]:
    """Yield ``(start, end, sequence)`` for every OSC sequence in *data*."""
    for match in OSC_RE.finditer(data):
        yield match.start(), match.end(), match.group(0)
