"""`semzones cells` command implementation."""

import argparse
import json
import sys

from semzones.cells import Cell
from semzones.cli.shared import configure_logging, replay_transcript
from semzones.config import load_config


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the cells command."""
    parser = argparse.ArgumentParser(
        prog="semzones cells",
        description="Replay a terminal transcript and list its command cells",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("transcript", help="Recorded terminal output, or - for stdin")
    parser.add_argument("--json", action="store_true", help="Print cells as JSON")
    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Scrollback limit applied while replaying (default: from config)",
    )
    return parser


def _row(marker) -> int | None:
    return marker.row if marker is not None else None


def cell_to_dict(cell: Cell) -> dict[str, object]:
    return {
        "prompt_start": cell.prompt_start.row,
        "input_start": _row(cell.input_start),
        "output_start": _row(cell.output_start),
        "output_end": _row(cell.output_end),
        "complete": cell.is_complete,
    }


def _format_row(value: object) -> str:
    return "-" if value is None else str(value)


def run(argv: list[str]) -> int:
    """Execute the cells command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    max_lines = args.max_lines if args.max_lines is not None else load_config().max_lines
    if max_lines is not None and max_lines < 1:
        print("Error: --max-lines must be positive", file=sys.stderr)
        return 2

    try:
        session = replay_transcript(args.transcript, max_lines=max_lines)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rows = [cell_to_dict(cell) for cell in session.tracker.cells(session.buffer)]
    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    if not rows:
        print("no cells found")
        return 0
    print("  #  prompt  input  output  end  state")
    for index, row in enumerate(rows, start=1):
        state = "complete" if row["complete"] else "open"
        print(
            f"{index:>3}  {_format_row(row['prompt_start']):>6}  {_format_row(row['input_start']):>5}"
            f"  {_format_row(row['output_start']):>6}  {_format_row(row['output_end']):>3}  {state}"
        )
    return 0
