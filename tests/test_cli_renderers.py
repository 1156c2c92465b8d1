from __future__ import annotations

from io import StringIO

import pytest
from rich.console import Console

from culture_pulse.cli import renderers
from tests.helpers.cli import summary_payload


@pytest.fixture()
def recorded(monkeypatch: pytest.MonkeyPatch) -> Console:
    console = Console(file=StringIO(), record=True, width=100, color_system=None)
    monkeypatch.setattr(renderers, "console", console)
    return console


def test_dashboard_shows_sentiment_and_plan_hint(recorded: Console) -> None:
    renderers.render_dashboard(summary_payload(), None)

    text = recorded.export_text()
    assert "3.5 out of 5.0 avg" in text
    assert "Based on 2 anonymous responses" in text
    assert "culture-pulse plan" in text
    assert "Okay week" in text
    assert "No comment provided" in text


def test_empty_dashboard_lists_no_feedback(recorded: Console) -> None:
    empty = {
        "response_count": 0,
        "average_mood": 0.0,
        "histogram": [{"mood": mood, "count": 0} for mood in range(1, 6)],
        "recent": [],
    }

    renderers.render_dashboard(empty, None)

    text = recorded.export_text()
    assert "0.0 out of 5.0 avg" in text
    assert "No feedback received yet." in text


def test_action_plan_text_is_not_parsed_as_markup(recorded: Console) -> None:
    renderers.render_action_plan(
        {"summary": "Use [bold] wisely", "point1": "One", "point2": "Two", "point3": "Three"}
    )

    text = recorded.export_text()
    assert "Use [bold] wisely" in text
    assert "Step 3" in text


def test_mood_picker_lists_every_level(recorded: Console) -> None:
    renderers.render_mood_picker()

    text = recorded.export_text()
    for label in ("Awful", "Poor", "Neutral", "Good", "Amazing"):
        assert label in text
