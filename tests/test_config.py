"""Tests for typemeter.config – environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from typemeter.config import DEFAULT_TICK_MS, Settings


class TestDefaults:
    def test_empty_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("HOME", str(tmp_path))
        s = Settings.from_env({})
        assert s.data_dir == Path.home() / ".typemeter"
        assert s.user_id == "local"
        assert s.tick_interval_ms == DEFAULT_TICK_MS
        assert s.log_level == "INFO"

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TYPEMETER_USER", "carol")
        assert Settings.from_env().user_id == "carol"


class TestOverrides:
    def test_all_values(self, tmp_path: Path):
        s = Settings.from_env(
            {
                "TYPEMETER_HOME": str(tmp_path),
                "TYPEMETER_USER": " dave ",
                "TYPEMETER_TICK_MS": "250",
                "TYPEMETER_LOG_LEVEL": "debug",
            }
        )
        assert s.data_dir == tmp_path
        assert s.user_id == "dave"
        assert s.tick_interval_ms == 250
        assert s.log_level == "DEBUG"

    def test_blank_user_falls_back(self):
        assert Settings.from_env({"TYPEMETER_USER": "   "}).user_id == "local"


class TestInvalidValues:
    @pytest.mark.parametrize("raw", ["abc", "0", "-10", " "])
    def test_bad_tick_interval(self, raw):
        assert Settings.from_env({"TYPEMETER_TICK_MS": raw}).tick_interval_ms == DEFAULT_TICK_MS

    def test_unknown_log_level(self):
        assert Settings.from_env({"TYPEMETER_LOG_LEVEL": "chatty"}).log_level == "INFO"
