"""Illustrative sample feedback for first runs.

Updates:
    v0.1.0 - 2026-10-19 - Seed the store from data/sample_feedback.json.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from ..core.feedback_records import SAMPLE_ID_PREFIX, FeedbackRecord, now_millis
from ..db.feedback_store import FeedbackStore

logger = logging.getLogger(__name__)

DEFAULT_DATASET_PATH = Path("data/sample_feedback.json")


class SampleDataInitializer:
    """Seeds a never-initialized store with sample records.

    Sample record ids start with ``sample-`` so they can be told apart from
    real submissions.
    """

    def __init__(
        self,
        store: FeedbackStore,
        dataset_path: Path | str = DEFAULT_DATASET_PATH,
    ) -> None:
        self._store = store
        self._dataset_path = Path(dataset_path)

    def initialize(self) -> bool:
        """Seed the store only if its slot has never been written.

        A store that was explicitly cleared stays empty.

        Returns:
            bool: ``True`` when sample records were written.
        """

        if self._store.exists():
            return False
        records = self.build_records()
        if not records:
            return False
        self._store.save(records)
        logger.info("sample_feedback_seeded", extra={"records": len(records)})
        return True

    def refresh(self) -> int:
        """Replace the stored sequence with fresh sample records.

        Returns:
            int: Number of records written.
        """

        records = self.build_records()
        self._store.save(records)
        logger.info("sample_feedback_refreshed", extra={"records": len(records)})
        return len(records)

    def build_records(self) -> List[FeedbackRecord]:
        """Materialize the dataset with timestamps relative to now.

        Raises:
            InvalidRecordError: If a dataset entry has a mood outside the 1-5 scale.
        """

        now = now_millis()
        return [
            FeedbackRecord(
                id=f"{SAMPLE_ID_PREFIX}{index}",
                mood=int(item["mood"]),
                comment=str(item.get("comment", "")),
                timestamp=now - int(item.get("age_ms", 0)),
            )
            for index, item in enumerate(self._load_dataset(), start=1)
        ]

    def _load_dataset(self) -> List[dict]:
        """Load the sample dataset from disk.

        Raises:
            ValueError: If the dataset file does not contain a list.
        """

        if not self._dataset_path.exists():
            logger.warning("Sample dataset not found: %s", self._dataset_path)
            return []
        with self._dataset_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, list):
            raise ValueError("Sample feedback dataset is not a list of objects")
        return data
