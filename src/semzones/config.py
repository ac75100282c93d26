"""Configuration for semzones."""

import json
import logging
import os
import secrets
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from semzones.errors import ConfigError
from semzones.models import DEFAULT_KEYMAPS, KeymapConfig, SemzonesConfig

log = logging.getLogger(__name__)

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_KEYMAPS",
    "KeymapConfig",
    "SemzonesConfig",
    "load_config",
    "save_config",
    "resolve_bindings",
    "update_keymaps",
]

CONFIG_DIR = Path.home() / ".semzones"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config(path: Path | None = None) -> SemzonesConfig:
    """Load config from file, with env var overrides.

    Reads ``~/.semzones/config.json`` (or *path*) and applies the
    ``SEMZONES_MAX_LINES`` override. Falls back to defaults when the file is
    absent, is not valid JSON, or does not validate.

    Returns:
        The resolved ``SemzonesConfig`` instance.
    """
    config_file = path or CONFIG_FILE
    raw_config: dict[str, Any] = {}

    if config_file.exists():
        try:
            with open(config_file) as f:
                loaded = json.load(f)
        except json.JSONDecodeError as exc:
            log.warning(
                "invalid config JSON in %s (%s); falling back to defaults",
                config_file,
                exc,
            )
        else:
            if isinstance(loaded, dict):
                raw_config = loaded
            log.debug("loaded config from %s", config_file)

    try:
        config = SemzonesConfig.model_validate(raw_config)
    except ValidationError as exc:
        log.warning(
            "invalid config in %s (%d error(s)); falling back to defaults",
            config_file,
            exc.error_count(),
        )
        config = SemzonesConfig()

    if max_lines_raw := os.environ.get("SEMZONES_MAX_LINES"):
        try:
            max_lines = int(max_lines_raw)
        except ValueError:
            max_lines = 0
        if max_lines > 0:
            config.max_lines = max_lines
        else:
            log.warning("ignoring invalid SEMZONES_MAX_LINES=%r", max_lines_raw)

    return config


def save_config(config: SemzonesConfig, path: Path | None = None) -> None:
    """Save config to file.

    Writes atomically (temp file + rename).

    Args:
        config: Configuration to persist.
        path: Target file; defaults to ``~/.semzones/config.json``.

    Raises:
        ConfigError: If the config directory or file cannot be written.
    """
    config_file = path or CONFIG_FILE
    temp_file = config_file.parent / f".{config_file.name}.{os.getpid()}.{secrets.token_hex(8)}.tmp"
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(temp_file, "w") as f:
            json.dump(config.model_dump(exclude_none=True), f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_file, config_file)
    except OSError as exc:
        try:
            temp_file.unlink(missing_ok=True)
        except OSError:
            pass
        raise ConfigError(f"cannot write config to {config_file}: {exc}") from exc
    log.debug("saved config to %s", config_file)


def resolve_bindings(config: SemzonesConfig | KeymapConfig) -> dict[str, str]:
    """Resolve the keymap config into a fixed action -> trigger table.

    Unset actions take their default trigger; actions set to ``False`` or an
    empty string are left out.
    """
    keymaps = config.keymaps if isinstance(config, SemzonesConfig) else config
    bindings: dict[str, str] = {}
    for action, default in DEFAULT_KEYMAPS.items():
        value = getattr(keymaps, action)
        if value is None:
            value = default
        if value:
            bindings[action] = value
        else:
            log.debug("action %s disabled", action)
    return bindings


def update_keymaps(
    config: SemzonesConfig, changes: dict[str, str | bool | None]
) -> SemzonesConfig:
    """Return a copy of *config* with keymap *changes* applied.

    Each change maps an action to a trigger name, ``False`` to disable it, or
    ``None`` to restore its default.

    Raises:
        ConfigError: If a change names an unknown action or carries ``True``.
    """
    unknown = sorted(set(changes) - set(DEFAULT_KEYMAPS))
    if unknown:
        raise ConfigError(f"unknown action(s): {', '.join(unknown)}")
    try:
        keymaps = KeymapConfig.model_validate({**config.keymaps.model_dump(), **changes})
    except ValidationError as exc:
        raise ConfigError(f"invalid keymap change: {exc}") from exc
    log.debug("updated keymaps: %s", changes)
    return config.model_copy(update={"keymaps": keymaps})
