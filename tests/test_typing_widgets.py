"""Tests for typemeter.ui.typing_widgets – passage rendering."""

from __future__ import annotations

from datetime import datetime, timezone

from typemeter.core.passages import Category
from typemeter.core.session import CharState, SessionRecord, classify_characters
from typemeter.ui.colors import Palette
from typemeter.ui.typing_widgets import format_recent_results, render_passage_html


class TestRenderPassageHtml:
    def test_empty(self):
        assert render_passage_html("", []) == ""

    def test_runs_are_merged(self):
        out = render_passage_html("cat", classify_characters("cat", ""))
        assert out.count("<span") == 2
        assert ">c</span>" in out
        assert ">at</span>" in out

    def test_state_colors_used(self):
        out = render_passage_html("cat", classify_characters("cat", "cx"))
        assert Palette.SUCCESS in out
        assert Palette.ERROR in out
        assert "font-weight:600" in out

    def test_escapes_markup(self):
        text = "<b>&"
        out = render_passage_html(text, classify_characters(text, ""))
        assert ">&lt;</span>" in out
        assert ">b&gt;&amp;</span>" in out
        assert "<b>" not in out

    def test_fully_typed(self):
        out = render_passage_html("ab", classify_characters("ab", "ab"))
        assert out.count("<span") == 1
        assert Palette.SUCCESS in out


class TestFormatRecentResults:
    def test_empty(self):
        assert format_recent_results([]) == "No tests yet"

    def test_one_line_per_record_in_given_order(self):
        records = [
            SessionRecord(Category.HARD, 55, 88, "x", 30, recorded_at=datetime(2024, 5, 2, 9, 30, tzinfo=timezone.utc)),
            SessionRecord(Category.EASY, 40, 100, "y", 20, recorded_at=datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)),
        ]
        lines = format_recent_results(records).splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("2024-05-02 09:30")
        assert "Hard" in lines[0] and "55 wpm" in lines[0] and "88%" in lines[0]
        assert "Easy" in lines[1] and "100%" in lines[1]
