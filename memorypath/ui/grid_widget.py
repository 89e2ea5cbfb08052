"""Painted tile grid for the memory game."""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QKeyEvent, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from memorypath.core.engine import TileState
from memorypath.ui.colors import TILE_ICONS, GameColors, tile_fill


class TileGridWidget(QWidget):
    """Square grid of rounded tiles; clicks and number keys become taps."""

    COLUMNS = 3

    def __init__(
        self,
        on_tap: Callable[[int], None],
        tile_count: int = 9,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._on_tap = on_tap
        self._states: list[TileState] = [TileState.NORMAL] * tile_count
        self._highlighted: Optional[int] = None
        self._hover_index: Optional[int] = None
        self._interactive = False
        self.setMinimumSize(300, 300)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

    @property
    def rows(self) -> int:
        return math.ceil(len(self._states) / self.COLUMNS)

    def set_tiles(self, states: Sequence[TileState], highlighted: Optional[int], interactive: bool) -> None:
        """Replace the displayed tile states and repaint."""
        self._states = list(states)
        self._highlighted = highlighted
        self._interactive = interactive
        self.setCursor(Qt.PointingHandCursor if interactive else Qt.ArrowCursor)
        self.update()

    def tile_at(self, x: float, y: float) -> Optional[int]:
        for index in range(len(self._states)):
            if self._tile_rect(index).contains(x, y):
                return index
        return None

    def _tile_rect(self, index: int, scale: float = 1.0) -> QRectF:
        spacing = 12.0
        side = min(self.width(), self.height() * self.COLUMNS / self.rows)
        cell = (side - spacing * (self.COLUMNS - 1)) / self.COLUMNS
        grid_w = cell * self.COLUMNS + spacing * (self.COLUMNS - 1)
        grid_h = cell * self.rows + spacing * (self.rows - 1)
        left = (self.width() - grid_w) / 2
        top = (self.height() - grid_h) / 2
        row, col = divmod(index, self.COLUMNS)
        rect = QRectF(left + col * (cell + spacing), top + row * (cell + spacing), cell, cell)
        if scale != 1.0:
            grow = cell * (scale - 1.0) / 2
            rect.adjust(-grow, -grow, grow, grow)
        return rect

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        for index, state in enumerate(self._states):
            scale = 1.1 if index == self._highlighted else 1.0
            rect = self._tile_rect(index, scale)
            hovered = self._interactive and index == self._hover_index
            painter.setBrush(QColor(tile_fill(state, hovered)))
            painter.setPen(QPen(QColor(255, 255, 255, 30), 1))
            painter.drawRoundedRect(rect, 16, 16)

            icon = TILE_ICONS[state]
            if icon:
                font = painter.font()
                font.setPointSize(max(14, int(rect.height() * 0.3)))
                font.setBold(True)
                painter.setFont(font)
                painter.setPen(QColor(GameColors.PRIMARY_BACKGROUND))
                painter.drawText(rect, Qt.AlignCenter, icon)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        index = self.tile_at(pos.x(), pos.y())
        if index != self._hover_index:
            self._hover_index = index
            self.update()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event) -> None:
        self._hover_index = None
        self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.LeftButton:
            pos = event.position()
            index = self.tile_at(pos.x(), pos.y())
            if index is not None:
                self._on_tap(index)
                return
        super().mousePressEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        # 1-9 map to tiles row by row
        text = event.text()
        if len(text) == 1 and text in "123456789" and int(text) <= len(self._states):
            self._on_tap(int(text) - 1)
            return
        super().keyPressEvent(event)
