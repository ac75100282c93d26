"""Helpers shared by the CLI commands."""

import logging
import sys
from pathlib import Path

from semzones.session import TerminalSession

READ_CHUNK_SIZE = 4096


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )


def replay_transcript(path: str, max_lines: int | None = None) -> TerminalSession:
    """Feed a recorded terminal transcript (``-`` for stdin) into a new session.

    Raises:
        OSError: If the transcript cannot be read.
    """
    session = TerminalSession(max_lines=max_lines)
    if path == "-":
        stream = sys.stdin.buffer
        for chunk in iter(lambda: stream.read(READ_CHUNK_SIZE), b""):
            session.feed(chunk)
        return session
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(READ_CHUNK_SIZE), b""):
            session.feed(chunk)
    return session
