"""Manager dashboard operations.

Updates:
    v0.1.0 - 2026-10-19 - Summary statistics, guarded plan requests and data reset.
"""

from __future__ import annotations

import logging

from ..core.aggregation import DEFAULT_RECENT_LIMIT, DashboardSummary, summarize
from ..core.feedback_records import ActionPlanRecord
from ..db.feedback_store import FeedbackStore
from .action_plan_generator import ActionPlanGenerator

logger = logging.getLogger(__name__)


class NoFeedbackError(RuntimeError):
    """Raised when a plan is requested while the store holds no feedback."""


class PlanRequestInProgressError(RuntimeError):
    """Raised when a plan is requested while another request is pending."""


class DashboardService:
    """Reads aggregates, requests action plans and clears feedback."""

    def __init__(
        self,
        store: FeedbackStore,
        plan_generator: ActionPlanGenerator,
        *,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        self._store = store
        self._generator = plan_generator
        self._recent_limit = recent_limit
        self._plan_pending = False

    @property
    def plan_pending(self) -> bool:
        return self._plan_pending

    def summary(self, recent_limit: int | None = None) -> DashboardSummary:
        """Recompute the dashboard figures from the stored records."""

        limit = self._recent_limit if recent_limit is None else recent_limit
        return summarize(self._store.load(), recent_limit=limit)

    async def request_plan(self) -> ActionPlanRecord:
        """Generate an action plan for the stored feedback.

        Raises:
            NoFeedbackError: If there is no feedback at all.
            PlanRequestInProgressError: If a previous request has not finished.
            ActionPlanGenerationError: If generation fails.
        """

        if self._plan_pending:
            raise PlanRequestInProgressError("An action plan is already being generated.")
        records = self._store.load()
        if not records:
            raise NoFeedbackError("No feedback received yet.")

        self._plan_pending = True
        try:
            return await self._generator.generate(records)
        finally:
            self._plan_pending = False

    def reset(self) -> None:
        """Irreversibly remove every stored feedback record."""

        self._store.clear()
