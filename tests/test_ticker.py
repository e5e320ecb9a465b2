"""Tests for typemeter.core.ticker – the QTimer-backed elapsed ticker."""

from __future__ import annotations

from PySide6.QtCore import QCoreApplication, QEvent, QObject, QTimer

from typemeter.core.passages import Category, Passage
from typemeter.core.session import TypingSession
from typemeter.core.ticker import ElapsedTicker


def _noop() -> None:
    pass


class TestElapsedTicker:
    def test_inactive_until_started(self, qapp):
        t = ElapsedTicker(_noop)
        assert not t.is_active
        assert not t.cancelled

    def test_interval(self, qapp):
        assert ElapsedTicker(_noop, interval_ms=250).interval_ms == 250

    def test_interval_floor(self, qapp):
        assert ElapsedTicker(_noop, interval_ms=0).interval_ms == 1

    def test_start_and_stop(self, qapp):
        t = ElapsedTicker(_noop)
        t.start()
        assert t.is_active
        t.stop()
        assert not t.is_active
        assert t.cancelled

    def test_stop_is_idempotent(self, qapp):
        t = ElapsedTicker(_noop)
        t.start()
        t.stop()
        t.stop()
        assert t.cancelled

    def test_cannot_restart_after_stop(self, qapp):
        t = ElapsedTicker(_noop)
        t.start()
        t.stop()
        t.start()
        assert not t.is_active


class TestTickerWithSession:
    def test_finish_cancels_timer(self, qapp, clock):
        t = ElapsedTicker(_noop)
        s = TypingSession(Passage("ab", Category.EASY), clock=clock, ticker=t)
        s.submit_input("a")
        assert t.is_active
        s.submit_input("ab")
        assert not t.is_active
        assert t.cancelled

    def test_dispose_cancels_timer(self, qapp, clock):
        t = ElapsedTicker(_noop)
        s = TypingSession(Passage("abc", Category.EASY), clock=clock, ticker=t)
        s.submit_input("a")
        s.dispose()
        assert not t.is_active
        assert t.cancelled

    def test_restarts_leave_no_timers_on_owner(self, qapp, clock):
        owner = QObject()
        for _ in range(50):
            t = ElapsedTicker(_noop, parent=owner)
            s = TypingSession(Passage("abc", Category.EASY), clock=clock, ticker=t)
            s.submit_input("a")
            s.dispose()
        QCoreApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete)
        qapp.processEvents()
        assert owner.findChildren(QTimer) == []

    def test_finished_ticker_released(self, qapp, clock):
        owner = QObject()
        t = ElapsedTicker(_noop, parent=owner)
        s = TypingSession(Passage("a", Category.EASY), clock=clock, ticker=t)
        s.submit_input("a")
        assert owner.findChildren(QTimer) == []
        assert not t.is_active
