"""Application entry point and setup for the Typemeter typing trainer."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from typemeter.config import Settings
from typemeter.core.history import HistoryStore
from typemeter.core.passages import PassageRepository
from typemeter.ui.main_window import MainWindow


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load resources, and start the main window."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = QApplication(sys.argv)
    app.setApplicationName("Typemeter")
    app.setApplicationDisplayName("Typemeter")

    passages = PassageRepository()
    history = HistoryStore(settings.data_dir)
    logging.info("History for %s loaded from %s", settings.user_id, history.file_path)

    window = MainWindow(passages=passages, history=history, settings=settings)
    window.resize(960, 640)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
