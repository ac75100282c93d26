"""Shared pytest fixtures."""

from pathlib import Path

import pytest

import semzones.config as config_module
from semzones.buffer import LineBuffer
from semzones.models import ZoneKind
from semzones.tracker import ZoneTracker


@pytest.fixture()
def config_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Path, Path]:
    """Redirect semzones config paths to a temp directory."""
    config_dir = tmp_path / ".semzones"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.delenv("SEMZONES_MAX_LINES", raising=False)
    return config_dir, config_file


@pytest.fixture()
def config_file(config_paths: tuple[Path, Path]) -> Path:
    return config_paths[1]


@pytest.fixture()
def buffer() -> LineBuffer:
    """A buffer with 30 numbered lines."""
    buf = LineBuffer()
    buf.append_text("\n".join(f"line {i}" for i in range(30)))
    return buf


@pytest.fixture()
def tracker() -> ZoneTracker:
    return ZoneTracker()


def record(tracker: ZoneTracker, buffer: LineBuffer, *zones: tuple[str, int]) -> None:
    """Record ``(letter, row)`` markers in the given order."""
    for letter, row in zones:
        tracker.registry.context(buffer).record_zone(ZoneKind(letter), row)


def osc(letter: str, params: str = "") -> bytes:
    """Return a BEL-terminated OSC 133 sequence."""
    return f"\x1b]133;{letter}{params}\x07".encode()
