"""Application entry point and setup for Memory Path."""

import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from memorypath.core.progress import ProgressStore
from memorypath.core.settings import load_settings
from memorypath.ui.main_window import MemoryPathWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and progress, then show the game window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Memory Path")
    app.setApplicationDisplayName("Memory Path")

    settings = load_settings(os.environ.get("MEMORYPATH_SETTINGS"))
    progress_store = ProgressStore()

    window = MemoryPathWindow(progress_store=progress_store, settings=settings)
    window.show()

    sys.exit(app.exec())
