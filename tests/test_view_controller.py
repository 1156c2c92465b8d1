from __future__ import annotations

import pytest

from culture_pulse.cli.state import AppState
from culture_pulse.core.feedback_records import ViewMode
from culture_pulse.services.view_controller import ViewController


def test_switching_view_discards_displayed_plan() -> None:
    state = AppState(view_mode=ViewMode.MANAGEMENT, current_plan={"summary": "x"})
    controller = ViewController(state)

    changed = controller.show(ViewMode.EMPLOYEE)

    assert changed is True
    assert state.view_mode is ViewMode.EMPLOYEE
    assert state.current_plan is None


def test_showing_current_view_keeps_plan() -> None:
    state = AppState(view_mode=ViewMode.MANAGEMENT, current_plan={"summary": "x"})

    assert ViewController(state).show("management") is False
    assert state.current_plan == {"summary": "x"}


def test_toggle_alternates_views() -> None:
    state = AppState()
    controller = ViewController(state)

    assert controller.toggle() is ViewMode.MANAGEMENT
    assert controller.toggle() is ViewMode.EMPLOYEE


def test_unknown_view_is_rejected() -> None:
    with pytest.raises(ValueError):
        ViewController(AppState()).show("admin")
