from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, List, Optional, Protocol, Tuple

from memorypath.core.scheduler import Scheduler
from memorypath.core.sequence import generate_sequence, sequence_length
from memorypath.core.settings import GameSettings

logger = logging.getLogger(__name__)


class RoundState(Enum):
    IDLE = "idle"
    SHOWING = "showing"
    WAITING = "waiting"
    WON = "won"
    LOST = "lost"


class TileState(Enum):
    NORMAL = "normal"
    HIGHLIGHTED = "highlighted"
    CORRECT = "correct"
    WRONG = "wrong"


class RewardSink(Protocol):
    """Where the engine sends earned currency and streaks."""

    def award_reward(self, feathers: int, lanterns: int) -> None:
        ...

    def update_best_streak(self, game_id: int, streak: int) -> None:
        ...


class SequenceGameEngine:
    """Turn-based state machine behind the memory grid screen.

    Each round reveals a target sequence with timed highlights, then accepts
    taps until the sequence is reproduced (won) or a tap misses (lost).

    All delays go through the injected scheduler. Every scheduled callback is
    bound to the round id current at scheduling time; starting a new round
    bumps the id, so callbacks left over from an abandoned round are dropped
    when they fire.
    """

    def __init__(
        self,
        reward_sink: RewardSink,
        scheduler: Scheduler,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._reward_sink = reward_sink
        self._scheduler = scheduler
        self._settings = settings or GameSettings()
        self._rng = rng or random.Random()
        self._on_change = on_change

        self._state = RoundState.IDLE
        self._level = 1
        self._sequence: List[int] = []
        self._player_sequence: List[int] = []
        self._tile_states = [TileState.NORMAL] * self.tile_count
        self._highlighted_tile: Optional[int] = None
        self._input_enabled = False
        self._reward_visible = False
        self._round_id = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def level(self) -> int:
        return self._level

    @property
    def sequence(self) -> Tuple[int, ...]:
        return tuple(self._sequence)

    @property
    def player_sequence(self) -> Tuple[int, ...]:
        return tuple(self._player_sequence)

    @property
    def tile_states(self) -> Tuple[TileState, ...]:
        return tuple(self._tile_states)

    @property
    def highlighted_tile(self) -> Optional[int]:
        return self._highlighted_tile

    @property
    def input_enabled(self) -> bool:
        return self._input_enabled

    @property
    def reward_visible(self) -> bool:
        return self._reward_visible

    @property
    def round_id(self) -> int:
        return self._round_id

    @property
    def tile_count(self) -> int:
        return self._settings.sequence.tile_count

    @property
    def settings(self) -> GameSettings:
        return self._settings

    def tile_state(self, index: int) -> TileState:
        return self._tile_states[index]

    def reward_for_level(self, level: Optional[int] = None) -> Tuple[int, int]:
        """(feathers, lanterns) earned for winning at ``level`` (default: current)."""
        level = self._level if level is None else level
        rewards = self._settings.rewards
        return level * rewards.feathers_per_level, level * rewards.lanterns_per_level

    # ------------------------------------------------------------------
    # Round flow
    # ------------------------------------------------------------------

    def start_game(self) -> None:
        self._level = 1
        self.play_round()

    def retry_level(self) -> None:
        """Replay the current level; also restarts a round still in progress."""
        if self._state not in (RoundState.LOST, RoundState.SHOWING, RoundState.WAITING):
            logger.debug("Ignoring retry in state %s", self._state.value)
            return
        self.play_round()

    def next_level(self) -> None:
        if self._state is not RoundState.WON:
            logger.debug("Ignoring next level in state %s", self._state.value)
            return
        self._level += 1
        self._reward_visible = False
        self.play_round()

    def finish(self) -> None:
        """Leave the screen after a round; pending callbacks are discarded."""
        self._round_id += 1
        self._state = RoundState.IDLE
        self._input_enabled = False
        self._highlighted_tile = None
        self._notify()

    def play_round(self) -> None:
        self._round_id += 1
        self._state = RoundState.SHOWING
        self._player_sequence = []
        self._tile_states = [TileState.NORMAL] * self.tile_count
        self._highlighted_tile = None
        self._input_enabled = False
        self._reward_visible = False

        rules = self._settings.sequence
        length = sequence_length(self._level, rules)
        self._sequence = generate_sequence(length, self._rng, rules.tile_count)
        logger.info("Round %d: level %d, %d tiles", self._round_id, self._level, length)

        self._schedule(self._settings.timing.lead_in, self.reveal_sequence)
        self._notify()

    def reveal_sequence(self) -> None:
        """Schedule the highlight pulses, then hand the turn to the player."""
        timing = self._settings.timing
        delay = 0.0
        for tile in self._sequence:
            self._schedule(delay, lambda tile=tile: self._highlight_on(tile))
            self._schedule(delay + timing.highlight, lambda tile=tile: self._highlight_off(tile))
            delay += timing.step_interval
        last_off = (len(self._sequence) - 1) * timing.step_interval + timing.highlight
        self._schedule(max(last_off, 0.0) + timing.settle, self._begin_input)

    def handle_tap(self, tile_index: int) -> None:
        if not self._input_enabled:
            logger.debug("Ignoring tap on tile %d: input disabled", tile_index)
            return
        if not 0 <= tile_index < self.tile_count:
            logger.debug("Ignoring tap on tile %d: off the grid", tile_index)
            return

        self._player_sequence.append(tile_index)
        position = len(self._player_sequence) - 1

        if tile_index == self._sequence[position]:
            self._tile_states[tile_index] = TileState.CORRECT
            if len(self._player_sequence) == len(self._sequence):
                self._win()
        else:
            self._input_enabled = False
            self._tile_states[tile_index] = TileState.WRONG
            timing = self._settings.timing
            self._schedule(timing.review_delay, self._review_taps)
            self._schedule(timing.lost_delay, self._lose)
            logger.info("Round %d: wrong tap %d at position %d", self._round_id, tile_index, position)
        self._notify()

    # ------------------------------------------------------------------
    # Scheduled transitions
    # ------------------------------------------------------------------

    def _highlight_on(self, tile: int) -> None:
        self._highlighted_tile = tile
        self._tile_states[tile] = TileState.HIGHLIGHTED
        self._notify()

    def _highlight_off(self, tile: int) -> None:
        self._highlighted_tile = None
        self._tile_states[tile] = TileState.NORMAL
        self._notify()

    def _begin_input(self) -> None:
        self._state = RoundState.WAITING
        self._input_enabled = True
        self._notify()

    def _win(self) -> None:
        self._input_enabled = False
        self._state = RoundState.WON
        feathers, lanterns = self.reward_for_level()
        self._reward_sink.award_reward(feathers, lanterns)
        self._reward_sink.update_best_streak(self._settings.game_id, self._level)
        logger.info("Round %d won at level %d: +%d feathers, +%d lanterns",
                    self._round_id, self._level, feathers, lanterns)
        self._schedule(self._settings.timing.reward_delay, self._show_reward)

    def _show_reward(self) -> None:
        self._reward_visible = True
        self._notify()

    def _review_taps(self) -> None:
        # Mark each tapped position on its target tile; the mistaken tap stays Wrong
        # even when an earlier position matched on the same tile.
        wrong_tile = self._player_sequence[-1]
        for position, tapped in enumerate(self._player_sequence):
            target = self._sequence[position]
            self._tile_states[target] = TileState.CORRECT if tapped == target else TileState.WRONG
        self._tile_states[wrong_tile] = TileState.WRONG
        self._notify()

    def _lose(self) -> None:
        self._state = RoundState.LOST
        logger.info("Round %d lost at level %d", self._round_id, self._level)
        self._notify()

    def _schedule(self, delay: float, action: Callable[[], None]) -> None:
        round_id = self._round_id

        def fire() -> None:
            if round_id != self._round_id:
                logger.debug("Dropping callback from stale round %d", round_id)
                return
            action()

        self._scheduler.call_later(delay, fire)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
