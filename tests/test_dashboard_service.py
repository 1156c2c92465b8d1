from __future__ import annotations

import asyncio
from typing import Sequence

import pytest

from culture_pulse.core.feedback_records import ActionPlanRecord, FeedbackRecord
from culture_pulse.db.feedback_store import FeedbackStore
from culture_pulse.services.action_plan_generator import ActionPlanGenerationError
from culture_pulse.services.dashboard_service import (
    DashboardService,
    NoFeedbackError,
    PlanRequestInProgressError,
)
from tests.helpers.factories import make_records

PLAN = ActionPlanRecord(summary="Fine.", point1="A", point2="B", point3="C")


class StubGenerator:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.received: list[list[FeedbackRecord]] = []

    async def generate(self, records: Sequence[FeedbackRecord]) -> ActionPlanRecord:
        self.received.append(list(records))
        if self.error is not None:
            raise self.error
        return PLAN


def test_summary_reflects_store(store: FeedbackStore) -> None:
    store.save(make_records(1, 5, 3))
    service = DashboardService(store=store, plan_generator=StubGenerator(), recent_limit=2)

    summary = service.summary()

    assert summary.response_count == 3
    assert summary.average == 3.0
    assert [record.id for record in summary.recent] == ["rec-3", "rec-2"]
    assert len(service.summary(recent_limit=10).recent) == 3


def test_request_plan_passes_all_records(store: FeedbackStore) -> None:
    records = make_records(2, 4)
    store.save(records)
    generator = StubGenerator()
    service = DashboardService(store=store, plan_generator=generator)

    plan = asyncio.run(service.request_plan())

    assert plan == PLAN
    assert generator.received == [records]
    assert service.plan_pending is False


def test_request_plan_requires_feedback(store: FeedbackStore) -> None:
    generator = StubGenerator()
    service = DashboardService(store=store, plan_generator=generator)

    with pytest.raises(NoFeedbackError):
        asyncio.run(service.request_plan())
    assert generator.received == []


def test_request_plan_clears_pending_flag_after_failure(store: FeedbackStore) -> None:
    store.save(make_records(2))
    service = DashboardService(
        store=store, plan_generator=StubGenerator(error=ActionPlanGenerationError())
    )

    with pytest.raises(ActionPlanGenerationError):
        asyncio.run(service.request_plan())
    assert service.plan_pending is False


def test_request_plan_rejects_concurrent_request(store: FeedbackStore) -> None:
    store.save(make_records(3))

    class SlowGenerator(StubGenerator):
        def __init__(self) -> None:
            super().__init__()
            self.release = asyncio.Event()

        async def generate(self, records: Sequence[FeedbackRecord]) -> ActionPlanRecord:
            self.received.append(list(records))
            await self.release.wait()
            return PLAN

    async def scenario() -> tuple[ActionPlanRecord, Exception | None]:
        generator = SlowGenerator()
        service = DashboardService(store=store, plan_generator=generator)
        first = asyncio.create_task(service.request_plan())
        await asyncio.sleep(0)
        assert service.plan_pending is True
        second_error: Exception | None = None
        try:
            await service.request_plan()
        except PlanRequestInProgressError as exc:
            second_error = exc
        generator.release.set()
        plan = await first
        assert len(generator.received) == 1
        return plan, second_error

    plan, error = asyncio.run(scenario())

    assert plan == PLAN
    assert isinstance(error, PlanRequestInProgressError)


def test_reset_empties_store(store: FeedbackStore) -> None:
    store.save(make_records(1, 2))
    service = DashboardService(store=store, plan_generator=StubGenerator())

    service.reset()

    assert service.summary().response_count == 0
    assert store.exists() is True
