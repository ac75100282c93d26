"""`semzones keymaps` command implementation."""

import argparse
import sys
from pathlib import Path

from semzones.cli.shared import configure_logging
from semzones.config import load_config, resolve_bindings, save_config, update_keymaps
from semzones.errors import ConfigError
from semzones.tracker import ACTIONS


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the keymaps command."""
    parser = argparse.ArgumentParser(
        prog="semzones keymaps",
        description="Show the resolved action -> trigger bindings, or change them",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Config file to read and write")
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="ACTION=TRIGGER",
        help="Bind ACTION to TRIGGER and save the config (repeatable)",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        choices=sorted(ACTIONS),
        metavar="ACTION",
        help="Disable ACTION and save the config (repeatable)",
    )
    parser.add_argument(
        "--reset",
        action="append",
        default=[],
        choices=sorted(ACTIONS),
        metavar="ACTION",
        help="Restore the default trigger for ACTION and save the config (repeatable)",
    )
    return parser


def _parse_changes(args: argparse.Namespace) -> dict[str, str | bool | None]:
    changes: dict[str, str | bool | None] = {}
    for item in args.set:
        action, sep, trigger = item.partition("=")
        if not sep or not trigger:
            raise ConfigError(f"expected ACTION=TRIGGER, got {item!r}")
        changes[action.strip()] = trigger
    for action in args.disable:
        changes[action] = False
    for action in args.reset:
        changes[action] = None
    return changes


def run(argv: list[str]) -> int:
    """Execute the keymaps command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    config = load_config(args.config)
    try:
        changes = _parse_changes(args)
        if changes:
            config = update_keymaps(config, changes)
            save_config(config, args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if changes:
        print(f"Keymaps saved to {args.config or '~/.semzones/config.json'}\n")

    bindings = resolve_bindings(config)
    width = max(len(action) for action in ACTIONS)
    for action, description in ACTIONS.items():
        trigger = bindings.get(action, "(disabled)")
        print(f"  {action:<{width}}  {trigger:<12}  {description}")
    return 0
