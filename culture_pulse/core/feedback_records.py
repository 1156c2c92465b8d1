"""Domain records for anonymous mood feedback and generated action plans.

Updates:
    v0.1.0 - 2026-10-19 - Feedback and action plan records, mood scale and view modes.
"""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

MIN_MOOD = 1
MAX_MOOD = 5

SAMPLE_ID_PREFIX = "sample-"


@dataclass(slots=True, frozen=True)
class MoodLevel:
    """One of the five fixed moods offered by the intake form."""

    value: int
    icon: str
    label: str


MOOD_SCALE: tuple[MoodLevel, ...] = (
    MoodLevel(1, "😫", "Awful"),
    MoodLevel(2, "🙁", "Poor"),
    MoodLevel(3, "😐", "Neutral"),
    MoodLevel(4, "🙂", "Good"),
    MoodLevel(5, "🤩", "Amazing"),
)


def mood_level(value: int) -> MoodLevel:
    """Return the scale entry for a mood value.

    Raises:
        ValueError: If the value is outside the 1-5 scale.
    """

    if not is_valid_mood(value):
        raise ValueError(f"Mood must be an integer between {MIN_MOOD} and {MAX_MOOD}")
    return MOOD_SCALE[value - MIN_MOOD]


def is_valid_mood(value: Any) -> bool:
    # bool is an int subclass; True must not count as mood 1.
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_MOOD <= value <= MAX_MOOD
    )


def mood_tone(value: int) -> str:
    """Classify a mood as ``positive``, ``neutral`` or ``negative``."""

    if value >= 4:
        return "positive"
    if value == 3:
        return "neutral"
    return "negative"


def now_millis() -> int:
    return time.time_ns() // 1_000_000


class ViewMode(str, Enum):
    """Presentation modes of the application."""

    EMPLOYEE = "EMPLOYEE"
    MANAGEMENT = "MANAGEMENT"


class InvalidRecordError(ValueError):
    """Raised when a serialized record does not match the expected shape."""


@dataclass(slots=True, frozen=True)
class FeedbackRecord:
    """A single anonymous submission."""

    id: str
    mood: int
    comment: str
    timestamp: int

    def __post_init__(self) -> None:
        if not is_valid_mood(self.mood):
            raise InvalidRecordError(
                f"Mood must be an integer between {MIN_MOOD} and {MAX_MOOD}, got {self.mood!r}"
            )

    @classmethod
    def create(cls, mood: int, comment: str, *, timestamp: int | None = None) -> "FeedbackRecord":
        """Build a new record with a fresh identifier and the current time."""

        if not is_valid_mood(mood):
            raise ValueError(f"Mood must be an integer between {MIN_MOOD} and {MAX_MOOD}")
        return cls(
            id=uuid.uuid4().hex,
            mood=mood,
            comment=comment,
            timestamp=now_millis() if timestamp is None else timestamp,
        )

    @property
    def is_sample(self) -> bool:
        return self.id.startswith(SAMPLE_ID_PREFIX)

    @property
    def has_comment(self) -> bool:
        return bool(self.comment.strip())

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable representation used in storage."""

        return {
            "id": self.id,
            "mood": self.mood,
            "comment": self.comment,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeedbackRecord":
        """Rebuild a record from its stored form.

        Raises:
            InvalidRecordError: If a field is missing or has the wrong type.
        """

        if not isinstance(data, Mapping):
            raise InvalidRecordError(f"Expected an object, got {type(data).__name__}")
        identifier = data.get("id")
        mood = data.get("mood")
        comment = data.get("comment", "")
        timestamp = data.get("timestamp")
        if not isinstance(identifier, str) or not identifier:
            raise InvalidRecordError("Feedback record requires a non-empty string 'id'")
        if not is_valid_mood(mood):
            raise InvalidRecordError(f"Feedback record {identifier} has invalid mood {mood!r}")
        if not isinstance(comment, str):
            raise InvalidRecordError(f"Feedback record {identifier} has a non-text comment")
        if (
            isinstance(timestamp, bool)
            or not isinstance(timestamp, (int, float))
            or not math.isfinite(timestamp)
        ):
            raise InvalidRecordError(f"Feedback record {identifier} has invalid timestamp")
        return cls(id=identifier, mood=mood, comment=comment, timestamp=int(timestamp))


ACTION_PLAN_FIELDS: tuple[str, ...] = ("point1", "point2", "point3", "summary")


@dataclass(slots=True, frozen=True)
class ActionPlanRecord:
    """Summary plus three prioritized action items."""

    summary: str
    point1: str
    point2: str
    point3: str

    @property
    def points(self) -> tuple[str, str, str]:
        return (self.point1, self.point2, self.point3)

    def as_dict(self) -> dict[str, str]:
        return {
            "summary": self.summary,
            "point1": self.point1,
            "point2": self.point2,
            "point3": self.point3,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActionPlanRecord":
        """Validate and build a plan; every field must be a non-empty string.

        Raises:
            InvalidRecordError: If any required field is missing or blank.
        """

        if not isinstance(data, Mapping):
            raise InvalidRecordError(f"Expected an object, got {type(data).__name__}")
        missing = [
            name
            for name in ACTION_PLAN_FIELDS
            if not isinstance(data.get(name), str) or not data[name].strip()
        ]
        if missing:
            raise InvalidRecordError(
                f"Action plan missing required fields: {', '.join(missing)}"
            )
        return cls(**{name: data[name].strip() for name in ACTION_PLAN_FIELDS})


__all__ = [
    "ACTION_PLAN_FIELDS",
    "ActionPlanRecord",
    "FeedbackRecord",
    "InvalidRecordError",
    "MAX_MOOD",
    "MIN_MOOD",
    "MOOD_SCALE",
    "MoodLevel",
    "SAMPLE_ID_PREFIX",
    "ViewMode",
    "is_valid_mood",
    "mood_level",
    "mood_tone",
    "now_millis",
]
