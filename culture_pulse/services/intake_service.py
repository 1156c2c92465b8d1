"""Feedback intake: validation, record creation and form state.

Updates:
    v0.1.0 - 2026-10-19 - Mood-gated submission and timed confirmation reset.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.feedback_records import (
    MAX_MOOD,
    MIN_MOOD,
    FeedbackRecord,
    is_valid_mood,
)
from ..db.feedback_store import FeedbackStore

logger = logging.getLogger(__name__)


class MoodNotSelectedError(ValueError):
    """Raised when a submission is attempted before a mood is chosen."""


class InvalidMoodError(ValueError):
    """Raised when the selected mood is outside the 1-5 scale."""


class FeedbackIntake:
    """Creates feedback records and hands them to the store."""

    def __init__(self, store: FeedbackStore) -> None:
        self._store = store

    def submit(self, mood: Optional[int], comment: str = "") -> FeedbackRecord:
        """Record one anonymous submission.

        Args:
            mood (int | None): Selected mood; ``None`` means nothing was picked.
            comment (str): Optional free text, may be empty.

        Returns:
            FeedbackRecord: The stored record.

        Raises:
            MoodNotSelectedError: If no mood was selected.
            InvalidMoodError: If the mood is not an integer between 1 and 5.
        """

        if mood is None:
            raise MoodNotSelectedError("Select a mood before submitting feedback.")
        if not is_valid_mood(mood):
            raise InvalidMoodError(
                f"Mood must be an integer between {MIN_MOOD} and {MAX_MOOD}, got {mood!r}."
            )
        record = FeedbackRecord.create(mood, comment or "")
        self._store.append(record)
        logger.info(
            "feedback_submitted",
            extra={"mood": record.mood, "comment_length": len(record.comment)},
        )
        return record


@dataclass
class IntakeForm:
    """State of one intake form between submissions.

    After a successful submission the form shows a confirmation until
    ``reset_delay`` seconds have passed, then clears mood and comment.
    """

    intake: FeedbackIntake
    reset_delay: float = 3.0
    clock: Callable[[], float] = time.monotonic
    selected_mood: Optional[int] = None
    comment: str = ""
    submitted_at: Optional[float] = None
    last_record: Optional[FeedbackRecord] = None

    @property
    def submitted(self) -> bool:
        return self.submitted_at is not None

    @property
    def can_submit(self) -> bool:
        return self.selected_mood is not None and not self.submitted

    def select_mood(self, mood: int) -> None:
        if not is_valid_mood(mood):
            raise InvalidMoodError(
                f"Mood must be an integer between {MIN_MOOD} and {MAX_MOOD}, got {mood!r}."
            )
        self.selected_mood = mood

    def set_comment(self, comment: str) -> None:
        self.comment = comment

    def submit(self) -> FeedbackRecord:
        """Submit the current selection and enter the confirmation state.

        Raises:
            MoodNotSelectedError: If no mood is selected.
            RuntimeError: If the previous confirmation is still showing.
        """

        if self.submitted:
            raise RuntimeError("Form is showing a confirmation; wait for it to reset.")
        record = self.intake.submit(self.selected_mood, self.comment)
        self.submitted_at = self.clock()
        self.last_record = record
        return record

    def seconds_until_reset(self) -> float:
        if self.submitted_at is None:
            return 0.0
        return max(0.0, self.reset_delay - (self.clock() - self.submitted_at))

    def refresh(self) -> bool:
        """Reset the form if the confirmation delay has elapsed.

        Returns:
            bool: ``True`` when the form was reset by this call.
        """

        if self.submitted_at is None or self.seconds_until_reset() > 0:
            return False
        self.reset()
        return True

    def reset(self) -> None:
        self.selected_mood = None
        self.comment = ""
        self.submitted_at = None
