"""Summary statistics over a user's session history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

from typemeter.core.metrics import round_half_up, round_to_hundredths
from typemeter.core.passages import Category
from typemeter.core.session import SessionRecord


@dataclass(frozen=True)
class CategoryBest:
    best_wpm: int = 0
    best_accuracy: int = 0


@dataclass(frozen=True)
class StatsSummary:
    best_by_category: Dict[Category, CategoryBest] = field(default_factory=dict, hash=False)
    average_wpm: int = 0
    average_accuracy: float = 0.0
    total_sessions: int = 0

    def best_for(self, category: Category) -> CategoryBest:
        return self.best_by_category.get(Category(category), CategoryBest())


def summarize(records: Iterable[SessionRecord]) -> StatsSummary:
    """Reduce session records to per-category bests and overall averages.

    Best WPM and best accuracy are independent maxima and may come from
    different records. An empty history gives an all-zero summary.
    """
    records = list(records)
    if not records:
        return StatsSummary()

    best: Dict[Category, CategoryBest] = {}
    for record in records:
        current = best.get(record.category, CategoryBest())
        best[record.category] = CategoryBest(
            best_wpm=max(current.best_wpm, record.words_per_minute),
            best_accuracy=max(current.best_accuracy, record.accuracy_percent),
        )

    total = len(records)
    mean_wpm = sum(r.words_per_minute for r in records) / total
    mean_accuracy = sum(r.accuracy_percent for r in records) / total
    ordered = {c: best[c] for c in Category if c in best}
    return StatsSummary(
        best_by_category=ordered,
        average_wpm=round_half_up(mean_wpm),
        average_accuracy=round_to_hundredths(mean_accuracy),
        total_sessions=total,
    )
