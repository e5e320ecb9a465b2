from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtGui import QCloseEvent, QShortcut, QKeySequence
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from typemeter.config import Settings
from typemeter.core.history import HistoryStore
from typemeter.core.passages import Category, PassageNotFoundError, PassageRepository
from typemeter.core.session import TypingSession
from typemeter.core.stats import summarize
from typemeter.core.ticker import ElapsedTicker
from typemeter.ui.colors import CATEGORY_COLORS, Palette
from typemeter.ui.typing_widgets import PassageLabel, StatTile, format_recent_results

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen trainer: pick a difficulty, type the passage, see the score.

    Every start or restart builds a fresh TypingSession; the previous one is
    disposed so its ticker never outlives it.
    """

    def __init__(self, passages: PassageRepository, history: HistoryStore, settings: Settings) -> None:
        super().__init__()
        self._passages = passages
        self._history = history
        self._settings = settings
        self._session: Optional[TypingSession] = None
        self._category = Category.EASY

        self._passage_label: Optional[PassageLabel] = None
        self._input_box: Optional[QLineEdit] = None
        self._time_tile: Optional[StatTile] = None
        self._feedback_label: Optional[QLabel] = None
        self._result_tiles: dict[str, StatTile] = {}
        self._stats_tiles: dict[str, StatTile] = {}
        self._recent_label: Optional[QLabel] = None

        self._build_ui()
        self._refresh_stats()
        self._start_session(self._category)

    def _build_ui(self) -> None:
        self.setWindowTitle("Typemeter")
        root = QWidget()
        root.setStyleSheet(f"background: {Palette.BG}; color: {Palette.TEXT_PRIMARY};")
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        buttons = QHBoxLayout()
        for category in Category:
            button = QPushButton(f"{category.value.title()} Test")
            button.setStyleSheet(
                f"background: {CATEGORY_COLORS[category.value]}; color: {Palette.BG};"
                " border-radius: 6px; padding: 8px 16px; font-weight: 600;"
            )
            button.clicked.connect(lambda _checked=False, c=category: self._start_session(c))
            buttons.addWidget(button)
        restart = QPushButton("Restart")
        restart.clicked.connect(lambda: self._start_session(self._category))
        buttons.addStretch(1)
        buttons.addWidget(restart)
        layout.addLayout(buttons)

        self._passage_label = PassageLabel()
        layout.addWidget(self._passage_label, 1)

        self._input_box = QLineEdit()
        self._input_box.setPlaceholderText("Start typing…")
        self._input_box.textChanged.connect(self._on_text_changed)
        layout.addWidget(self._input_box)

        live = QHBoxLayout()
        self._time_tile = StatTile("Time")
        live.addWidget(self._time_tile)
        for key, caption in (("wpm", "WPM"), ("accuracy", "Accuracy"), ("duration", "Duration")):
            tile = StatTile(caption, "-")
            self._result_tiles[key] = tile
            live.addWidget(tile)
        layout.addLayout(live)

        self._feedback_label = QLabel("")
        self._feedback_label.setStyleSheet(f"color: {Palette.TEXT_SECONDARY};")
        layout.addWidget(self._feedback_label)

        stats = QHBoxLayout()
        for key, caption in (("avg_wpm", "Average WPM"), ("avg_acc", "Average Accuracy"), ("total", "Total Tests")):
            tile = StatTile(caption)
            self._stats_tiles[key] = tile
            stats.addWidget(tile)
        for category in Category:
            tile = StatTile(f"Best {category.value.title()}", "0 / 0%")
            self._stats_tiles[category.value] = tile
            stats.addWidget(tile)
        layout.addLayout(stats)

        recent_caption = QLabel("Recent Tests")
        recent_caption.setStyleSheet(f"color: {Palette.TEXT_SECONDARY}; font-size: 12px;")
        layout.addWidget(recent_caption)
        self._recent_label = QLabel("")
        self._recent_label.setStyleSheet(f"color: {Palette.TEXT_PRIMARY}; font-family: monospace;")
        layout.addWidget(self._recent_label)

        restart_shortcut = QShortcut(QKeySequence("Ctrl+R"), self)
        restart_shortcut.activated.connect(lambda: self._start_session(self._category))
        self.setCentralWidget(root)

    def _start_session(self, category: Category) -> None:
        """Discard the current session and begin a new one on a fresh passage."""
        self._dispose_session()
        try:
            passage = self._passages.fetch_passage(category)
        except PassageNotFoundError as e:
            logger.warning("Cannot start %s session: %s", category.value, e)
            self._feedback_label.setText("No texts found for this difficulty")
            return
        self._category = category
        ticker = ElapsedTicker(self._on_tick, self._settings.tick_interval_ms, parent=self)
        self._session = TypingSession(passage, ticker=ticker)
        for tile in self._result_tiles.values():
            tile.set_value("-")
        self._feedback_label.setText(f"{category.value.title()} · {passage.topic}")
        self._input_box.blockSignals(True)
        self._input_box.clear()
        self._input_box.blockSignals(False)
        self._input_box.setReadOnly(False)
        self._input_box.setFocus()
        self._render()

    def _dispose_session(self) -> None:
        if self._session is not None:
            self._session.dispose()
            self._session = None

    def _on_text_changed(self, text: str) -> None:
        if self._session is None:
            return
        self._session.submit_input(text)
        self._render()
        if self._session.is_finished():
            self._session_finished()

    def _on_tick(self) -> None:
        if self._session is None:
            return
        self._time_tile.set_value(_format_seconds(self._session.elapsed_seconds()))

    def _render(self) -> None:
        view = self._session.view()
        self._passage_label.show_passage(self._session.passage.text, view.classified)
        self._time_tile.set_value(_format_seconds(view.elapsed_seconds))

    def _session_finished(self) -> None:
        record = self._session.finalize()
        result = self._session.result()
        self._result_tiles["wpm"].set_value(str(result.wpm))
        self._result_tiles["accuracy"].set_value(f"{result.accuracy}%")
        self._result_tiles["duration"].set_value(_format_seconds(result.duration))
        self._input_box.setReadOnly(True)
        self._history.append_record(self._settings.user_id, record)
        self._feedback_label.setText("Test complete! Press Ctrl+R to try again.")
        self._refresh_stats()

    def _refresh_stats(self) -> None:
        summary = summarize(self._history.fetch_history(self._settings.user_id))
        self._stats_tiles["avg_wpm"].set_value(str(summary.average_wpm))
        self._stats_tiles["avg_acc"].set_value(f"{summary.average_accuracy:g}%")
        self._stats_tiles["total"].set_value(str(summary.total_sessions))
        for category in Category:
            best = summary.best_for(category)
            self._stats_tiles[category.value].set_value(f"{best.best_wpm} / {best.best_accuracy}%")
        self._recent_label.setText(format_recent_results(self._history.recent(self._settings.user_id)))

    def closeEvent(self, event: QCloseEvent) -> None:
        """Stop the ticker before the window goes away."""
        self._dispose_session()
        super().closeEvent(event)


def _format_seconds(seconds: int) -> str:
    m, s = divmod(max(0, seconds), 60)
    return f"{m}:{s:02d}"
