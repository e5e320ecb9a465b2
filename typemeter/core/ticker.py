"""Periodic elapsed-time callback tied to one typing session."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class Ticker(Protocol):
    """What the session engine needs from a periodic timer."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def is_active(self) -> bool: ...


class ElapsedTicker:
    """Single-use repeating QTimer.

    Once stopped it cannot be restarted; a new session gets a new ticker.
    The callback only reads session state.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval_ms: int = 1000,
        parent: Optional[QObject] = None,
    ) -> None:
        self._interval_ms = max(1, int(interval_ms))
        self._timer: Optional[QTimer] = QTimer(parent)
        self._timer.setInterval(self._interval_ms)
        self._timer.timeout.connect(callback)
        self._cancelled = False

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        if self._cancelled:
            logger.debug("Ignoring start() on a cancelled ticker")
            return
        self._timer.start()

    def stop(self) -> None:
        """Cancel the recurrence. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        timer, self._timer = self._timer, None
        timer.stop()
        # detach now so the owner stops listing it, delete once the loop runs
        timer.setParent(None)
        timer.deleteLater()
