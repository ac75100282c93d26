"""Command-line interface for semzones."""

import argparse

from semzones import __version__
from semzones.cli import cells, keymaps, zone

COMMANDS = {
    "cells": cells.run,
    "zone": zone.run,
    "keymaps": keymaps.run,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser; command arguments are parsed by the command."""
    parser = argparse.ArgumentParser(
        prog="semzones",
        description="Track OSC 133 semantic-prompt zones in terminal transcripts",
        epilog=(
            "commands: cells (list the command cells in a transcript), "
            "zone (print the input/output/cell lines owning a row), "
            "keymaps (show or change the action bindings)"
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("command", choices=sorted(COMMANDS), help="Command to run")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for the command")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    command_argv = list(args.args)
    if args.debug:
        command_argv.insert(0, "--debug")
    return COMMANDS[args.command](command_argv)


def entrypoint() -> None:
    raise SystemExit(main())
