"""Configuration models for semzones."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# A binding is an explicit trigger name, explicitly disabled (False or ""), or
# None to inherit the default.
Binding = str | Literal[False] | None

DEFAULT_KEYMAPS: dict[str, str] = {
    "next_cell": "]c",
    "prev_cell": "[c",
    "repeat_fwd": ";",
    "repeat_back": ",",
    "yank_input": "<leader>yi",
    "yank_output": "<leader>yo",
    "yank_cell": "<leader>yc",
    "select_input": "<leader>si",
    "select_output": "<leader>so",
    "select_cell": "<leader>sc",
}


class KeymapConfig(BaseModel):
    """Trigger names for each logical action exposed by the tracker."""

    model_config = ConfigDict(extra="forbid")

    next_cell: Binding = Field(default=None, description="Jump to the next cell's prompt.")
    prev_cell: Binding = Field(default=None, description="Jump to the previous cell's prompt.")
    repeat_fwd: Binding = Field(
        default=None, description="Repeat the last cell jump in the same direction."
    )
    repeat_back: Binding = Field(
        default=None, description="Repeat the last cell jump in the opposite direction."
    )
    yank_input: Binding = None
    yank_output: Binding = None
    yank_cell: Binding = None
    select_input: Binding = None
    select_output: Binding = None
    select_cell: Binding = None


class SemzonesConfig(BaseModel):
    """Runtime configuration for semzones."""

    model_config = ConfigDict(extra="forbid")

    keymaps: KeymapConfig = Field(default_factory=KeymapConfig)
    max_lines: int | None = Field(
        default=None,
        gt=0,
        description=(
            "Scrollback limit for replayed transcripts. Older lines scroll off the "
            "top and take their markers with them. None keeps every line. "
            "Overridden by SEMZONES_MAX_LINES env var."
        ),
    )
