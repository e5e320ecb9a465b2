"""Scoring formulas shared by the session engine and the stats aggregator."""

from __future__ import annotations

import math

# Sub-millisecond completions are scored as if they took one millisecond.
MIN_ELAPSED_MS = 1.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def round_to_hundredths(value: float) -> float:
    """Half-up rounding to two decimal places."""
    return math.floor(value * 100.0 + 0.5) / 100.0


def word_count(text: str) -> int:
    """Number of non-empty tokens separated by runs of whitespace."""
    return len(text.split())


def words_per_minute(text: str, elapsed_ms: float) -> int:
    """Passage word count over elapsed minutes, rounded.

    ``elapsed_ms`` is clamped to ``MIN_ELAPSED_MS`` so the result is always
    finite.
    """
    minutes = max(elapsed_ms, MIN_ELAPSED_MS) / 60000.0
    return max(0, round_half_up(word_count(text) / minutes))


def accuracy_percent(length: int, errors: int) -> int:
    """Share of positions typed correctly, as an integer in [0, 100]."""
    if length <= 0:
        return 100
    computed = round_half_up((length - errors) / length * 100.0)
    return max(0, min(100, computed))


def duration_seconds(elapsed_ms: float) -> int:
    return max(0, round_half_up(elapsed_ms / 1000.0))
