"""Typing practice UI: passage display and stat tiles."""

from __future__ import annotations

import html
from typing import Iterable, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from typemeter.core.session import CharState, SessionRecord
from typemeter.ui.colors import Palette, blend_hex, color_for_state


def render_passage_html(text: str, classified: Sequence[CharState]) -> str:
    """Rich-text rendering of *text*, one colored span per run of equal states."""
    if not text:
        return ""
    current_bg = blend_hex(Palette.CARD_BG, Palette.PRIMARY, 0.6)
    parts: list[str] = []
    run_start = 0
    for i in range(1, len(text) + 1):
        if i < len(text) and classified[i] == classified[run_start]:
            continue
        state = classified[run_start]
        chunk = html.escape(text[run_start:i])
        style = f"color:{color_for_state(state)};"
        if state is CharState.CURRENT:
            style += f" background:{current_bg}; font-weight:600;"
        elif state is CharState.INCORRECT:
            style += " text-decoration:underline;"
        parts.append(f'<span style="{style}">{chunk}</span>')
        run_start = i
    return "".join(parts)


def format_recent_results(records: Iterable[SessionRecord]) -> str:
    """One line per record: date, difficulty, WPM and accuracy."""
    lines = [
        f"{r.recorded_at:%Y-%m-%d %H:%M}  {r.category.value.title():<6}  {r.words_per_minute:>3} wpm  {r.accuracy_percent:>3}%"
        for r in records
    ]
    return "\n".join(lines) if lines else "No tests yet"


class PassageLabel(QLabel):
    """Word-wrapped passage with per-character correctness coloring."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setTextFormat(Qt.RichText)
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setStyleSheet(
            f"""
            QLabel {{
                background: {Palette.CARD_BG};
                border: 1px solid {Palette.CARD_BORDER};
                border-radius: 8px;
                padding: 16px;
                font-family: monospace;
                font-size: 20px;
            }}
            """
        )

    def show_passage(self, text: str, classified: Sequence[CharState]) -> None:
        self.setText(render_passage_html(text, classified))


class StatTile(QWidget):
    """Caption above a large value, e.g. "WPM" / "52"."""

    def __init__(self, caption: str, value: str = "0", parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(2)
        self._caption = QLabel(caption)
        self._caption.setStyleSheet(f"color: {Palette.TEXT_SECONDARY}; font-size: 12px;")
        self._value = QLabel(value)
        self._value.setStyleSheet(f"color: {Palette.TEXT_PRIMARY}; font-size: 24px; font-weight: 700;")
        layout.addWidget(self._caption)
        layout.addWidget(self._value)

    def set_value(self, value: str) -> None:
        self._value.setText(value)

    def value(self) -> str:
        return self._value.text()
