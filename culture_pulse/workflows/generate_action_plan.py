"""Generate action plan workflow.

Updates:
    v0.1.0 - 2026-10-19 - Async plan request for the dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..services.dashboard_service import DashboardService


@dataclass
class GenerateActionPlanWorkflow:
    dashboard_service: DashboardService
    name: str = "generate_action_plan"

    async def run_async(self, context: dict) -> dict:
        """Request a plan for the stored feedback.

        Args:
            context (dict): Unused; the plan always covers the full store.

        Returns:
            dict: The validated plan under ``plan``.

        Raises:
            NoFeedbackError: If the store is empty.
            PlanRequestInProgressError: If a request is already pending.
            ActionPlanGenerationError: If generation fails.
        """

        plan = await self.dashboard_service.request_plan()
        return {"plan": plan.as_dict()}
