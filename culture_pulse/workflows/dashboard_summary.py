"""Dashboard summary workflow."""

from __future__ import annotations

from dataclasses import dataclass

from ..services.dashboard_service import DashboardService


@dataclass
class DashboardSummaryWorkflow:
    dashboard_service: DashboardService
    name: str = "dashboard_summary"

    def run(self, context: dict) -> dict:
        summary = self.dashboard_service.summary(context.get("recent_limit"))
        return {"summary": summary.as_dict()}
