"""Data models for semzones."""

from semzones.models.config import DEFAULT_KEYMAPS, KeymapConfig, SemzonesConfig
from semzones.models.zones import Direction, Marker, ResolvedMarker, ZoneKind

__all__ = [
    "DEFAULT_KEYMAPS",
    "Direction",
    "KeymapConfig",
    "Marker",
    "ResolvedMarker",
    "SemzonesConfig",
    "ZoneKind",
]
