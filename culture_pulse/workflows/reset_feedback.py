"""Reset feedback workflow."""

from __future__ import annotations

from dataclasses import dataclass

from ..services.dashboard_service import DashboardService


@dataclass
class ResetFeedbackWorkflow:
    dashboard_service: DashboardService
    name: str = "reset_feedback"

    def run(self, context: dict) -> dict:
        # Confirmation happens at the interface boundary before this runs.
        self.dashboard_service.reset()
        return {"status": "cleared"}
