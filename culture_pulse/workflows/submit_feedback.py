"""Submit feedback workflow.

Updates:
    v0.1.0 - 2026-10-19 - Route intake submissions through the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.intake_service import FeedbackIntake


@dataclass
class SubmitFeedbackWorkflow:
    intake: FeedbackIntake
    name: str = "submit_feedback"

    def run(self, context: dict) -> dict:
        """Record one submission.

        Args:
            context (dict): Payload with ``mood`` and an optional ``comment``.

        Returns:
            dict: The stored record under ``record``.

        Raises:
            MoodNotSelectedError: If the context carries no mood.
            InvalidMoodError: If the mood is outside the 1-5 scale.
        """

        record = self.intake.submit(context.get("mood"), context.get("comment") or "")
        return {"record": record.as_dict()}
