from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import pytest

from culture_pulse.core.feedback_records import ActionPlanRecord
from culture_pulse.core.orchestrator import Orchestrator
from culture_pulse.db.feedback_store import FeedbackStore
from culture_pulse.services.dashboard_service import DashboardService
from culture_pulse.services.intake_service import FeedbackIntake
from culture_pulse.workflows.dashboard_summary import DashboardSummaryWorkflow
from culture_pulse.workflows.generate_action_plan import GenerateActionPlanWorkflow
from culture_pulse.workflows.reset_feedback import ResetFeedbackWorkflow
from culture_pulse.workflows.submit_feedback import SubmitFeedbackWorkflow

PLAN = ActionPlanRecord(summary="Okay.", point1="One", point2="Two", point3="Three")


class StubGenerator:
    async def generate(self, records):
        return PLAN


@pytest.fixture()
def orchestrator(store: FeedbackStore) -> Orchestrator:
    dashboard = DashboardService(store=store, plan_generator=StubGenerator(), recent_limit=5)
    return Orchestrator(
        workflows={
            "submit_feedback": SubmitFeedbackWorkflow(intake=FeedbackIntake(store=store)),
            "dashboard_summary": DashboardSummaryWorkflow(dashboard_service=dashboard),
            "generate_action_plan": GenerateActionPlanWorkflow(dashboard_service=dashboard),
            "reset_feedback": ResetFeedbackWorkflow(dashboard_service=dashboard),
        }
    )


def test_submit_then_summarize(orchestrator: Orchestrator) -> None:
    submitted = orchestrator.execute("submit_feedback", {"mood": 4, "comment": "Nice"})
    orchestrator.execute("submit_feedback", {"mood": 2})

    summary = orchestrator.execute("dashboard_summary", {"recent_limit": 1})["summary"]

    assert submitted["record"]["mood"] == 4
    assert summary["response_count"] == 2
    assert summary["average_mood"] == 3.0
    assert len(summary["recent"]) == 1
    assert summary["recent"][0]["mood"] == 2


def test_generate_plan_requires_async_dispatch(orchestrator: Orchestrator) -> None:
    orchestrator.execute("submit_feedback", {"mood": 3, "comment": "Hmm"})

    with pytest.raises(TypeError):
        orchestrator.execute("generate_action_plan", {})

    result = asyncio.run(orchestrator.execute_async("generate_action_plan", {}))
    assert result == {"plan": PLAN.as_dict()}


def test_execute_async_runs_sync_workflows(orchestrator: Orchestrator) -> None:
    result = asyncio.run(orchestrator.execute_async("reset_feedback", {}))

    assert result == {"status": "cleared"}
    assert orchestrator.execute("dashboard_summary", {})["summary"]["response_count"] == 0


def test_unknown_workflow_raises(orchestrator: Orchestrator) -> None:
    with pytest.raises(KeyError):
        orchestrator.execute("missing", {})


def test_failures_are_logged_and_propagated(
    orchestrator: Orchestrator, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR, logger="culture_pulse.core.orchestrator"):
        with pytest.raises(ValueError):
            orchestrator.execute("submit_feedback", {"mood": 9})

    failure = next(record for record in caplog.records if record.getMessage() == "workflow_failed")
    assert failure.tool == "submit_feedback"


def test_register_adds_workflow() -> None:
    @dataclass
    class EchoWorkflow:
        name: str = "echo"

        def run(self, context: dict) -> dict:
            return dict(context)

    orchestrator = Orchestrator(workflows={})
    orchestrator.register(EchoWorkflow())

    assert orchestrator.execute("echo", {"value": 1}) == {"value": 1}
