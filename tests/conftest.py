"""Shared fixtures: a controllable clock and a ticker that counts its calls."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Callable clock in seconds that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTicker:
    def __init__(self) -> None:
        self.starts = 0
        self.stops = 0

    @property
    def is_active(self) -> bool:
        return self.starts > self.stops

    def start(self) -> None:
        self.starts += 1

    def stop(self) -> None:
        self.stops += 1


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication so QTimer-backed objects can be created."""
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
