from __future__ import annotations

import logging
import math
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from typemeter.core.metrics import accuracy_percent, duration_seconds, words_per_minute
from typemeter.core.passages import Category, Passage

if TYPE_CHECKING:
    from typemeter.core.ticker import Ticker

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


class CharState(str, Enum):
    """How a passage position is shown while typing."""

    UNTYPED = "untyped"
    CURRENT = "current"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class SessionNotFinishedError(RuntimeError):
    """finalize() was called before the passage was fully typed."""


@dataclass(frozen=True)
class SessionRecord:
    """Score of one completed session. This is the unit handed to storage."""

    category: Category
    words_per_minute: int
    accuracy_percent: int
    completed_text: str
    duration_seconds: int
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["category"] = self.category.value
        payload["recorded_at"] = self.recorded_at.isoformat()
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SessionRecord":
        recorded_at = datetime.fromisoformat(str(payload["recorded_at"]))
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)
        return cls(
            category=Category(payload["category"]),
            words_per_minute=int(payload["words_per_minute"]),
            accuracy_percent=int(payload["accuracy_percent"]),
            completed_text=str(payload["completed_text"]),
            duration_seconds=int(payload["duration_seconds"]),
            recorded_at=recorded_at,
        )


@dataclass(frozen=True)
class SessionResult:
    wpm: int
    accuracy: int
    duration: int


@dataclass(frozen=True)
class SessionView:
    """Read-only projection pushed to the display on keystrokes and ticks."""

    classified: Tuple[CharState, ...]
    elapsed_seconds: int
    phase: Phase


def classify_characters(passage: str, typed: str) -> List[CharState]:
    """Classify every passage position against what has been typed so far."""
    cursor = len(typed)
    states: List[CharState] = []
    for i, expected in enumerate(passage):
        if i == cursor:
            states.append(CharState.CURRENT)
        elif i > cursor:
            states.append(CharState.UNTYPED)
        elif typed[i] == expected:
            states.append(CharState.CORRECT)
        else:
            states.append(CharState.INCORRECT)
    return states


class TypingSession:
    """One attempt at typing a passage: Idle -> Active -> Finished.

    Input arrives as successive snapshots of the whole typed text. Only the
    newest character of each snapshot is judged, against the passage position
    it extends into; earlier characters are never re-scored. The session
    finishes when the snapshot length equals the passage length, after which
    input is ignored. There is no way back from Finished: restarting means
    building a new session.

    Times come from *clock* (seconds, ``time.time`` by default). An optional
    *ticker* is started on the first keystroke and stopped exactly once, on
    finish or on :meth:`dispose`, whichever comes first.
    """

    def __init__(
        self,
        passage: Passage,
        clock: Callable[[], float] = time.time,
        ticker: Optional[Ticker] = None,
    ) -> None:
        self._passage = passage
        self._clock = clock
        self._ticker = ticker
        self._ticker_started = False
        self._ticker_stopped = False
        self._input = ""
        self._cursor = 0
        self._error_count = 0
        self._started_at: Optional[float] = None
        self._finished_at: Optional[float] = None
        self._phase = Phase.IDLE
        self._record: Optional[SessionRecord] = None

    def __enter__(self) -> "TypingSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    @property
    def passage(self) -> Passage:
        return self._passage

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def input(self) -> str:
        return self._input

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def started_at(self) -> Optional[float]:
        return self._started_at

    @property
    def finished_at(self) -> Optional[float]:
        return self._finished_at

    def is_finished(self) -> bool:
        return self._phase is Phase.FINISHED

    def submit_input(self, new_input: str) -> None:
        """Consume the latest snapshot of the typed text."""
        if self._phase is Phase.FINISHED:
            logger.debug("Input after finish ignored (%d chars)", len(new_input))
            return
        if self._phase is Phase.IDLE:
            self._started_at = self._clock()
            self._phase = Phase.ACTIVE
            self._start_ticker()

        text = self._passage.text
        if new_input:
            expected = text[self._cursor] if self._cursor < len(text) else None
            if new_input[-1] != expected:
                self._error_count += 1

        self._input = new_input
        self._cursor = len(new_input)

        # an empty passage is complete as soon as typing starts
        if self._cursor == len(text) or not text:
            self._finished_at = self._clock()
            self._phase = Phase.FINISHED
            self._stop_ticker()
            logger.info(
                "Session finished: %d chars, %d errors, %.2fs",
                len(text),
                self._error_count,
                self._finished_at - self._started_at,
            )

    def elapsed_seconds(self, now_fn: Optional[Callable[[], float]] = None) -> int:
        """Whole seconds since the first keystroke; frozen once finished."""
        if self._started_at is None:
            return 0
        if self._finished_at is not None:
            end = self._finished_at
        else:
            end = (now_fn or self._clock)()
        return max(0, int(math.floor(end - self._started_at)))

    def classified(self) -> List[CharState]:
        return classify_characters(self._passage.text, self._input)

    def view(self, now_fn: Optional[Callable[[], float]] = None) -> SessionView:
        return SessionView(
            classified=tuple(self.classified()),
            elapsed_seconds=self.elapsed_seconds(now_fn),
            phase=self._phase,
        )

    def finalize(self) -> SessionRecord:
        """Build the record for a finished session. Repeat calls return the same record."""
        if self._phase is not Phase.FINISHED:
            raise SessionNotFinishedError(f"Cannot finalize a session in phase {self._phase.value!r}")
        if self._record is None:
            text = self._passage.text
            elapsed_ms = (self._finished_at - self._started_at) * 1000.0
            self._record = SessionRecord(
                category=self._passage.category,
                words_per_minute=words_per_minute(text, elapsed_ms),
                accuracy_percent=accuracy_percent(len(text), self._error_count),
                completed_text=text,
                duration_seconds=duration_seconds(elapsed_ms),
            )
        return self._record

    def result(self) -> Optional[SessionResult]:
        if self._phase is not Phase.FINISHED:
            return None
        record = self.finalize()
        return SessionResult(
            wpm=record.words_per_minute,
            accuracy=record.accuracy_percent,
            duration=record.duration_seconds,
        )

    def dispose(self) -> None:
        """Release the ticker. The session stays readable afterwards."""
        self._stop_ticker()

    def _start_ticker(self) -> None:
        if self._ticker is None or self._ticker_started:
            return
        self._ticker_started = True
        self._ticker.start()

    def _stop_ticker(self) -> None:
        if self._ticker is None or not self._ticker_started or self._ticker_stopped:
            return
        self._ticker_stopped = True
        self._ticker.stop()
