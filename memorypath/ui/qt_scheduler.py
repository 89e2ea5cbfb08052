"""Scheduler backed by the Qt event loop."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QTimer


class QtScheduler:
    """Runs engine callbacks on the GUI thread via single-shot timers."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, round(delay * 1000)), callback)
