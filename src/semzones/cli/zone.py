"""`semzones zone` command implementation."""

import argparse
import sys

from semzones.cli.shared import configure_logging, replay_transcript
from semzones.config import load_config
from semzones.navigation import Zone


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the zone command."""
    parser = argparse.ArgumentParser(
        prog="semzones zone",
        description="Print the input, output, or whole cell owning a transcript row",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("transcript", help="Recorded terminal output, or - for stdin")
    parser.add_argument("--row", type=int, required=True, help="0-indexed buffer row")
    parser.add_argument(
        "--zone",
        choices=[zone.value for zone in Zone],
        default=Zone.OUTPUT.value,
        help="Part of the cell to print (default: output)",
    )
    return parser


def run(argv: list[str]) -> int:
    """Execute the zone command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    try:
        session = replay_transcript(args.transcript, max_lines=load_config().max_lines)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    zone = Zone(args.zone)
    if session.tracker.cell_at_row(session.buffer, args.row) is None:
        print(f"Error: no cell at row {args.row}", file=sys.stderr)
        return 1
    lines = session.tracker.zone_text(session.buffer, zone, args.row)
    if lines is None:
        print(f"Error: no {zone.value} zone boundaries for row {args.row}", file=sys.stderr)
        return 1
    if not lines:
        print(f"{zone.value} zone is empty", file=sys.stderr)
        return 0
    for line in lines:
        print(line)
    return 0
