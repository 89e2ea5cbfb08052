"""Tests for memorypath.core.settings – YAML-based game settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from memorypath.core.settings import (
    DEFAULT_SETTINGS_PATH,
    GameSettings,
    RewardSettings,
    SequenceRules,
    TimingSettings,
    load_settings,
)


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_timing(self):
        t = TimingSettings()
        assert (t.lead_in, t.step_interval, t.highlight, t.settle) == (1.0, 1.0, 0.6, 0.4)
        assert (t.reward_delay, t.review_delay, t.lost_delay) == (0.5, 0.5, 1.5)

    def test_rewards(self):
        assert RewardSettings() == RewardSettings(feathers_per_level=2, lanterns_per_level=1)

    def test_sequence_rules(self):
        assert SequenceRules() == SequenceRules(base_length=3, max_length=7, levels_per_step=2, tile_count=9)

    def test_game_id(self):
        assert GameSettings().game_id == 2

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GameSettings().game_id = 3  # type: ignore[misc]


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------

class TestLoadSettings:
    def test_bundled_file_matches_defaults(self):
        assert DEFAULT_SETTINGS_PATH.exists()
        assert load_settings() == GameSettings()

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", {"timing": {"lead_in": 0.25}, "game_id": 5})
        settings = load_settings(path)
        assert settings.timing.lead_in == 0.25
        assert settings.timing.highlight == 0.6
        assert settings.game_id == 5
        assert settings.rewards == RewardSettings()

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "s.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == GameSettings()

    def test_string_path(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", {"rewards": {"feathers_per_level": 3}})
        assert load_settings(str(path)).rewards.feathers_per_level == 3

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", [1, 2, 3])
        with pytest.raises(ValueError, match="expected a YAML mapping"):
            load_settings(path)

    def test_section_not_a_mapping(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", {"timing": 3})
        with pytest.raises(ValueError, match="'timing' must be a mapping"):
            load_settings(path)

    def test_unknown_key(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", {"sequence": {"length": 4}})
        with pytest.raises(ValueError, match="unknown keys"):
            load_settings(path)

    def test_bad_value(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", {"timing": {"settle": "soon"}})
        with pytest.raises(ValueError, match="timing.settle"):
            load_settings(path)

    def test_bool_rejected(self, tmp_path: Path):
        path = _write_yaml(tmp_path / "s.yaml", {"game_id": True})
        with pytest.raises(ValueError, match="game_id"):
            load_settings(path)

    @pytest.mark.parametrize(
        "data",
        [
            {"timing": {"settle": -0.1}},
            {"timing": {"highlight": 1.0}},
            {"timing": {"review_delay": 2.0}},
            {"sequence": {"base_length": 0}},
            {"sequence": {"base_length": 8}},
            {"sequence": {"tile_count": 1}},
            {"rewards": {"lanterns_per_level": -1}},
        ],
    )
    def test_invalid_values(self, tmp_path: Path, data):
        path = _write_yaml(tmp_path / "s.yaml", data)
        with pytest.raises(ValueError):
            load_settings(path)
