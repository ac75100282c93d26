"""Unit tests for semzones.config."""

import json

import pytest
from pydantic import ValidationError

from semzones.config import (
    DEFAULT_KEYMAPS,
    KeymapConfig,
    SemzonesConfig,
    load_config,
    resolve_bindings,
    save_config,
    update_keymaps,
)
from semzones.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_config(config_paths):
    """Apply config path isolation to every test in this module."""
    return config_paths


# ---------------------------------------------------------------------------
# load_config / save_config
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_no_file_returns_defaults(self, config_file):
        assert not config_file.exists()
        assert load_config() == SemzonesConfig()

    def test_loads_values_from_file(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"keymaps": {"next_cell": "gj"}, "max_lines": 500}))

        result = load_config()

        assert result.keymaps.next_cell == "gj"
        assert result.max_lines == 500

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"keymaps": {"repeat_fwd": False}}))
        assert load_config(path).keymaps.repeat_fwd is False

    def test_malformed_json_falls_back_to_defaults(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{ invalid json")

        with caplog.at_level("WARNING", logger="semzones.config"):
            result = load_config()

        assert result == SemzonesConfig()
        assert "falling back to defaults" in caplog.text

    def test_unknown_action_falls_back_to_defaults(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"keymaps": {"jump_home": "gg"}}))

        with caplog.at_level("WARNING", logger="semzones.config"):
            result = load_config()

        assert result == SemzonesConfig()
        assert "invalid config" in caplog.text

    def test_max_lines_env_override(self, config_file, monkeypatch):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"max_lines": 500}))
        monkeypatch.setenv("SEMZONES_MAX_LINES", "2000")

        assert load_config().max_lines == 2000

    @pytest.mark.parametrize("value", ["zero", "0", "-3"])
    def test_invalid_max_lines_env_is_ignored(self, monkeypatch, caplog, value):
        monkeypatch.setenv("SEMZONES_MAX_LINES", value)

        with caplog.at_level("WARNING", logger="semzones.config"):
            result = load_config()

        assert result.max_lines is None
        assert "SEMZONES_MAX_LINES" in caplog.text


class TestSaveConfig:
    def test_round_trip(self, config_file):
        config = SemzonesConfig(keymaps=KeymapConfig(prev_cell="gk", yank_cell=False), max_lines=10)
        save_config(config)

        assert json.loads(config_file.read_text()) == {
            "keymaps": {"prev_cell": "gk", "yank_cell": False},
            "max_lines": 10,
        }
        assert load_config() == config

    def test_no_temp_files_left_behind(self, config_file):
        save_config(SemzonesConfig())
        assert [p.name for p in config_file.parent.iterdir()] == ["config.json"]

    def test_unwritable_target_raises_config_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(ConfigError):
            save_config(SemzonesConfig(), blocker / "config.json")


# ---------------------------------------------------------------------------
# models / resolve_bindings
# ---------------------------------------------------------------------------


class TestModels:
    def test_true_is_not_a_binding(self):
        with pytest.raises(ValidationError):
            KeymapConfig(next_cell=True)

    def test_max_lines_must_be_positive(self):
        with pytest.raises(ValidationError):
            SemzonesConfig(max_lines=0)


class TestResolveBindings:
    def test_defaults(self):
        assert resolve_bindings(SemzonesConfig()) == DEFAULT_KEYMAPS

    def test_override_and_disable(self):
        keymaps = KeymapConfig(next_cell="gj", prev_cell="gk", repeat_fwd=False, repeat_back="")
        bindings = resolve_bindings(keymaps)

        assert bindings["next_cell"] == "gj"
        assert bindings["prev_cell"] == "gk"
        assert "repeat_fwd" not in bindings
        assert "repeat_back" not in bindings
        assert bindings["yank_output"] == "<leader>yo"


class TestUpdateKeymaps:
    def test_applies_changes_to_a_copy(self):
        config = SemzonesConfig(keymaps=KeymapConfig(prev_cell="gk"), max_lines=500)
        updated = update_keymaps(config, {"next_cell": "gj", "repeat_fwd": False, "prev_cell": None})

        assert updated.keymaps.next_cell == "gj"
        assert updated.keymaps.repeat_fwd is False
        assert updated.keymaps.prev_cell is None
        assert updated.max_lines == 500
        assert config.keymaps.prev_cell == "gk"

    def test_unknown_action(self):
        with pytest.raises(ConfigError, match="unknown action"):
            update_keymaps(SemzonesConfig(), {"bogus": "gj"})

    def test_true_is_rejected(self):
        with pytest.raises(ConfigError, match="invalid keymap change"):
            update_keymaps(SemzonesConfig(), {"next_cell": True})

    def test_saved_changes_load_back(self, config_file):
        save_config(update_keymaps(SemzonesConfig(), {"yank_cell": "Y"}))
        assert resolve_bindings(load_config())["yank_cell"] == "Y"
