from __future__ import annotations

import random
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from memorypath.core.engine import RoundState, SequenceGameEngine
from memorypath.core.progress import ProgressStore
from memorypath.core.settings import GameSettings
from memorypath.ui.colors import GameColors
from memorypath.ui.grid_widget import TileGridWidget
from memorypath.ui.qt_scheduler import QtScheduler


def _button_style(background: str, foreground: str) -> str:
    return f"""
        QPushButton {{
            background: {background};
            color: {foreground};
            border: none;
            border-radius: 16px;
            font-size: 18px;
            font-weight: 600;
            min-height: 54px;
            padding: 0 18px;
        }}
        QPushButton:pressed {{ padding-top: 2px; }}
    """


class MemoryPathWindow(QMainWindow):
    """The Memory Path screen: level header, status line, tile grid and round controls.

    All game logic lives in ``SequenceGameEngine``; the window only mirrors its
    state after every change and forwards button presses and taps.
    """

    def __init__(
        self,
        progress_store: ProgressStore,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self._progress_store = progress_store
        self._engine = SequenceGameEngine(
            reward_sink=progress_store,
            scheduler=QtScheduler(),
            settings=settings,
            rng=rng,
            on_change=self._refresh,
        )

        self._instructions_label: Optional[QLabel] = None
        self._level_label: Optional[QLabel] = None
        self._status_label: Optional[QLabel] = None
        self._balance_label: Optional[QLabel] = None
        self._grid: Optional[TileGridWidget] = None
        self._result_label: Optional[QLabel] = None
        self._reward_label: Optional[QLabel] = None
        self._start_button: Optional[QPushButton] = None
        self._next_button: Optional[QPushButton] = None
        self._finish_button: Optional[QPushButton] = None
        self._retry_button: Optional[QPushButton] = None

        self.setWindowTitle("Memory Path")
        self._build_ui()
        self._refresh()

    @property
    def engine(self) -> SequenceGameEngine:
        return self._engine

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("memoryPathRoot")
        root.setStyleSheet(f"#memoryPathRoot {{ background: {GameColors.PRIMARY_BACKGROUND}; }}")
        layout = QVBoxLayout(root)
        layout.setContentsMargins(20, 20, 20, 40)
        layout.setSpacing(20)

        self._balance_label = QLabel("")
        self._balance_label.setAlignment(Qt.AlignRight)
        self._balance_label.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: 13px;")
        layout.addWidget(self._balance_label)

        self._instructions_label = QLabel("Watch the crystals light up, then tap them in the same order!")
        self._instructions_label.setWordWrap(True)
        self._instructions_label.setAlignment(Qt.AlignCenter)
        self._instructions_label.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: 16px;")
        layout.addWidget(self._instructions_label)

        self._level_label = QLabel("")
        self._level_label.setAlignment(Qt.AlignCenter)
        self._level_label.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY}; font-size: 20px; font-weight: 700;")
        layout.addWidget(self._level_label)

        self._status_label = QLabel("")
        self._status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._status_label)

        self._grid = TileGridWidget(on_tap=self._engine.handle_tap, tile_count=self._engine.tile_count)
        layout.addWidget(self._grid, 1)

        self._result_label = QLabel("")
        self._result_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._result_label)

        self._reward_label = QLabel("")
        self._reward_label.setAlignment(Qt.AlignCenter)
        self._reward_label.setStyleSheet(f"color: {GameColors.TEXT_PRIMARY}; font-size: 18px; font-weight: 700;")
        layout.addWidget(self._reward_label)

        self._start_button = QPushButton("Start")
        self._start_button.setStyleSheet(_button_style(GameColors.HIGHLIGHT_YELLOW, GameColors.PRIMARY_BACKGROUND))
        self._start_button.clicked.connect(self._engine.start_game)
        layout.addWidget(self._start_button)

        won_row = QHBoxLayout()
        won_row.setSpacing(12)
        self._next_button = QPushButton("Next level")
        self._next_button.setStyleSheet(_button_style(GameColors.HIGHLIGHT_YELLOW, GameColors.PRIMARY_BACKGROUND))
        self._next_button.clicked.connect(self._engine.next_level)
        self._finish_button = QPushButton("Finish")
        self._finish_button.setStyleSheet(_button_style(GameColors.SECONDARY_BACKGROUND, GameColors.TEXT_PRIMARY))
        self._finish_button.clicked.connect(self._finish)
        won_row.addWidget(self._next_button)
        won_row.addWidget(self._finish_button)
        layout.addLayout(won_row)

        self._retry_button = QPushButton("Try again")
        self._retry_button.setStyleSheet(_button_style(GameColors.SOFT_ORANGE, GameColors.PRIMARY_BACKGROUND))
        self._retry_button.clicked.connect(self._engine.retry_level)
        layout.addWidget(self._retry_button)

        outer = QWidget()
        outer.setObjectName("memoryPathRoot")
        outer.setStyleSheet(root.styleSheet())
        outer_layout = QHBoxLayout(outer)
        outer_layout.addStretch(1)
        root.setMaximumWidth(500)
        outer_layout.addWidget(root, 10)
        outer_layout.addStretch(1)
        self.setCentralWidget(outer)
        self.resize(560, 860)

    def _refresh(self) -> None:
        """Mirror engine state into the widgets."""
        engine = self._engine
        state = engine.state

        feathers, lanterns = self._progress_store.get_balance()
        best = self._progress_store.get_best_streak(engine.settings.game_id)
        self._balance_label.setText(f"🪶 {feathers}   🏮 {lanterns}   Best level {best}")

        self._instructions_label.setVisible(state is RoundState.IDLE)
        self._level_label.setText(f"Level {engine.level}")

        if state is RoundState.SHOWING:
            self._status_label.setText("Watch carefully...")
            self._status_label.setStyleSheet(f"color: {GameColors.HIGHLIGHT_YELLOW}; font-size: 16px; font-weight: 500;")
        elif state is RoundState.WAITING:
            self._status_label.setText("Your turn! Tap in order")
            self._status_label.setStyleSheet(f"color: {GameColors.ACCENT_GREEN}; font-size: 16px; font-weight: 500;")
        else:
            self._status_label.setText("")

        self._grid.set_tiles(engine.tile_states, engine.highlighted_tile, engine.input_enabled)
        if engine.input_enabled:
            self._grid.setFocus()

        if state is RoundState.WON:
            self._result_label.setText("Perfect! ✨")
            self._result_label.setStyleSheet(f"color: {GameColors.HIGHLIGHT_YELLOW}; font-size: 24px; font-weight: 700;")
        elif state is RoundState.LOST:
            self._result_label.setText("Almost there!")
            self._result_label.setStyleSheet(f"color: {GameColors.SOFT_ORANGE}; font-size: 24px; font-weight: 700;")
        self._result_label.setVisible(state in (RoundState.WON, RoundState.LOST))

        reward_feathers, reward_lanterns = engine.reward_for_level()
        self._reward_label.setText(f"🪶 +{reward_feathers}    🏮 +{reward_lanterns}")
        self._reward_label.setVisible(state is RoundState.WON and engine.reward_visible)

        self._start_button.setVisible(state is RoundState.IDLE)
        self._next_button.setVisible(state is RoundState.WON)
        self._finish_button.setVisible(state is RoundState.WON)
        self._retry_button.setVisible(state is RoundState.LOST)

    def _finish(self) -> None:
        self._engine.finish()
        QTimer.singleShot(0, self.close)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._engine.finish()
        self._progress_store.save()
        super().closeEvent(event)
