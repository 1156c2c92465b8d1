"""Dashboard statistics computed from the current feedback sequence.

All helpers are pure and recompute from scratch on every call.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .feedback_records import MAX_MOOD, MIN_MOOD, FeedbackRecord

DEFAULT_RECENT_LIMIT = 5


def average_mood(records: Sequence[FeedbackRecord]) -> float:
    """Return the mean mood rounded half up to one decimal place, or 0.0 when empty."""

    if not records:
        return 0.0
    mean = Decimal(sum(record.mood for record in records)) / Decimal(len(records))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def mood_histogram(records: Sequence[FeedbackRecord]) -> list[tuple[int, int]]:
    """Count records per mood value; all five buckets are always present."""

    counts = Counter(record.mood for record in records)
    return [(mood, counts.get(mood, 0)) for mood in range(MIN_MOOD, MAX_MOOD + 1)]


def recent(records: Sequence[FeedbackRecord], n: int = DEFAULT_RECENT_LIMIT) -> list[FeedbackRecord]:
    """Return the last ``n`` records, most recent first."""

    if n <= 0:
        return []
    return list(reversed(records[-n:]))


@dataclass(slots=True)
class DashboardSummary:
    """Snapshot of the figures shown on the dashboard."""

    response_count: int
    average: float
    histogram: list[tuple[int, int]]
    recent: list[FeedbackRecord] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "response_count": self.response_count,
            "average_mood": self.average,
            "histogram": [{"mood": mood, "count": count} for mood, count in self.histogram],
            "recent": [record.as_dict() for record in self.recent],
        }


def summarize(
    records: Sequence[FeedbackRecord], recent_limit: int = DEFAULT_RECENT_LIMIT
) -> DashboardSummary:
    """Bundle every dashboard statistic for ``records``."""

    return DashboardSummary(
        response_count=len(records),
        average=average_mood(records),
        histogram=mood_histogram(records),
        recent=recent(records, recent_limit),
    )
