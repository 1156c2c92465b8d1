"""Persistence for the feedback sequence.

Updates:
    v0.1.0 - 2026-10-19 - Whole-sequence JSON slot with corruption fallback.
"""

from __future__ import annotations

import json
import logging
from typing import Sequence

from ..core.feedback_records import FeedbackRecord, InvalidRecordError
from .sqlite_client import SQLiteClient

logger = logging.getLogger(__name__)


class FeedbackStore:
    """Ordered feedback sequence stored as one JSON array in a named slot."""

    def __init__(self, sqlite_client: SQLiteClient, slot: str = "culture_pulse_data") -> None:
        self._sqlite = sqlite_client
        self._slot = slot

    @property
    def slot(self) -> str:
        return self._slot

    def exists(self) -> bool:
        """Return whether the slot has ever been written."""
        return self._sqlite.has_key(self._slot)

    def load(self) -> list[FeedbackRecord]:
        """Return the persisted records in insertion order.

        An absent or unreadable slot yields an empty list; corruption is logged
        and never raised.
        """

        raw = self._sqlite.get_value(self._slot)
        if raw is None:
            return []
        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise InvalidRecordError(
                    f"Expected a JSON array, got {type(payload).__name__}"
                )
            return [FeedbackRecord.from_dict(item) for item in payload]
        except (ValueError, OverflowError, RecursionError) as exc:
            logger.warning(
                "feedback_load_failed",
                extra={"slot": self._slot, "error": str(exc)},
            )
            return []

    def save(self, records: Sequence[FeedbackRecord]) -> None:
        """Overwrite the slot with ``records``."""

        payload = json.dumps([record.as_dict() for record in records], ensure_ascii=False)
        self._sqlite.set_value(self._slot, payload)
        logger.debug("Saved %s feedback records to slot=%s", len(records), self._slot)

    def append(self, record: FeedbackRecord) -> list[FeedbackRecord]:
        """Persist ``record`` after the existing ones and return the new sequence.

        Raises:
            ValueError: If a record with the same id is already stored.
        """

        records = self.load()
        if any(existing.id == record.id for existing in records):
            raise ValueError(f"Feedback record id already stored: {record.id}")
        records.append(record)
        self.save(records)
        return records

    def clear(self) -> None:
        """Replace every stored record with an empty sequence."""

        self.save([])
        logger.info("feedback_cleared", extra={"slot": self._slot})
