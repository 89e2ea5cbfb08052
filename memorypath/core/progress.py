from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


def _default_balance() -> Dict[str, int]:
    return {"feathers": 0, "lanterns": 0}


class ProgressStore:
    """Stores currency balances and best streaks per game. Persists to disk.
    File: ~/.memorypath/progress.json unless another path is given."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or Path.home() / ".memorypath" / "progress.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._balance, self._best_streaks = self._load()

    def get_balance(self) -> Tuple[int, int]:
        """Return (feathers, lanterns)."""
        return self._balance["feathers"], self._balance["lanterns"]

    def get_best_streak(self, game_id: int) -> int:
        return self._best_streaks.get(game_id, 0)

    def award_reward(self, feathers: int, lanterns: int) -> None:
        self._balance["feathers"] += feathers
        self._balance["lanterns"] += lanterns
        self._save()

    def update_best_streak(self, game_id: int, streak: int) -> None:
        """Record ``streak`` for ``game_id`` if it beats the stored value."""
        if streak <= self._best_streaks.get(game_id, 0):
            return
        self._best_streaks[game_id] = streak
        self._save()

    def reset(self) -> None:
        """Clear all balances and streaks."""
        self._balance = _default_balance()
        self._best_streaks = {}
        self._save()

    def save(self) -> None:
        """Persist current state to disk (e.g. on app exit)."""
        self._save()

    def _load(self) -> Tuple[Dict[str, int], Dict[int, int]]:
        balance = _default_balance()
        best_streaks: Dict[int, int] = {}
        if not self._file_path.exists():
            return balance, best_streaks
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return balance, best_streaks
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed progress file %s", self._file_path)
            return balance, best_streaks

        b = payload.get("balance", {})
        if isinstance(b, dict):
            for key in balance:
                try:
                    balance[key] = int(b.get(key, 0))
                except (TypeError, ValueError):
                    logger.warning("Ignoring bad %s balance %r in %s", key, b.get(key), self._file_path)
        streaks = payload.get("best_streaks", {})
        if isinstance(streaks, dict):
            for key, value in streaks.items():
                try:
                    best_streaks[int(key)] = int(value)
                except (TypeError, ValueError):
                    logger.warning("Skipping bad streak entry %r in %s", key, self._file_path)
        return balance, best_streaks

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "balance": dict(self._balance),
            # JSON object keys are strings
            "best_streaks": {str(key): value for key, value in self._best_streaks.items()},
        }
        try:
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
