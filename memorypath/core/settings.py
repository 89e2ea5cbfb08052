from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "data" / "settings.yaml"


@dataclass(frozen=True)
class TimingSettings:
    """Delays in seconds."""

    lead_in: float = 1.0
    step_interval: float = 1.0
    highlight: float = 0.6
    settle: float = 0.4
    reward_delay: float = 0.5
    review_delay: float = 0.5
    lost_delay: float = 1.5


@dataclass(frozen=True)
class RewardSettings:
    feathers_per_level: int = 2
    lanterns_per_level: int = 1


@dataclass(frozen=True)
class SequenceRules:
    base_length: int = 3
    max_length: int = 7
    levels_per_step: int = 2
    tile_count: int = 9


@dataclass(frozen=True)
class GameSettings:
    timing: TimingSettings = field(default_factory=TimingSettings)
    rewards: RewardSettings = field(default_factory=RewardSettings)
    sequence: SequenceRules = field(default_factory=SequenceRules)
    game_id: int = 2


def load_settings(path: Optional[Union[str, Path]] = None) -> GameSettings:
    """Load settings from YAML, filling missing keys with defaults.

    With no path the bundled ``data/settings.yaml`` is used.
    """
    settings_path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{settings_path.name}: expected a YAML mapping")

    settings = GameSettings(
        timing=_section(settings_path, raw, "timing", TimingSettings, float),
        rewards=_section(settings_path, raw, "rewards", RewardSettings, int),
        sequence=_section(settings_path, raw, "sequence", SequenceRules, int),
        game_id=_coerce(settings_path, "game_id", raw.get("game_id", 2), int),
    )
    _validate(settings_path, settings)
    logger.info("Loaded settings from %s", settings_path)
    return settings


def _section(settings_path: Path, raw: Dict[str, Any], name: str, cls, kind):
    values = raw.get(name) or {}
    if not isinstance(values, dict):
        raise ValueError(f"{settings_path.name}: '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"{settings_path.name}: unknown keys in '{name}': {', '.join(unknown)}")
    return cls(**{key: _coerce(settings_path, f"{name}.{key}", value, kind) for key, value in values.items()})


def _coerce(settings_path: Path, key: str, value: Any, kind):
    if isinstance(value, bool):
        raise ValueError(f"{settings_path.name}: invalid value for '{key}': {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"{settings_path.name}: invalid value for '{key}': {value!r}") from None


def _validate(settings_path: Path, settings: GameSettings) -> None:
    timing = settings.timing
    for f in fields(timing):
        if getattr(timing, f.name) < 0:
            raise ValueError(f"{settings_path.name}: 'timing.{f.name}' must not be negative")
    if timing.highlight >= timing.step_interval:
        raise ValueError(f"{settings_path.name}: 'timing.highlight' must be shorter than 'timing.step_interval'")
    if timing.review_delay > timing.lost_delay:
        raise ValueError(f"{settings_path.name}: 'timing.review_delay' must not exceed 'timing.lost_delay'")

    rules = settings.sequence
    if rules.base_length < 1 or rules.levels_per_step < 1:
        raise ValueError(f"{settings_path.name}: sequence lengths must be positive")
    if rules.base_length > rules.max_length:
        raise ValueError(f"{settings_path.name}: 'sequence.base_length' exceeds 'sequence.max_length'")
    if rules.tile_count < 2:
        raise ValueError(f"{settings_path.name}: 'sequence.tile_count' must be at least 2")

    rewards = settings.rewards
    if rewards.feathers_per_level < 0 or rewards.lanterns_per_level < 0:
        raise ValueError(f"{settings_path.name}: rewards must not be negative")
