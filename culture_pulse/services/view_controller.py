"""Switching between the intake and dashboard views."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from ..core.feedback_records import ViewMode

logger = logging.getLogger(__name__)


class ViewState(Protocol):
    view_mode: ViewMode
    current_plan: Optional[dict[str, Any]]


class ViewController:
    """Holds the current view mode on a shared state object."""

    def __init__(self, state: ViewState) -> None:
        self._state = state

    @property
    def mode(self) -> ViewMode:
        return self._state.view_mode

    def show(self, mode: ViewMode | str) -> bool:
        """Switch to ``mode``; any displayed action plan is discarded on a change.

        Returns:
            bool: ``True`` when the mode changed.

        Raises:
            ValueError: If ``mode`` does not name a view.
        """

        target = mode if isinstance(mode, ViewMode) else ViewMode(str(mode).upper())
        if target == self._state.view_mode:
            return False
        self._state.view_mode = target
        self._state.current_plan = None
        logger.info("view_changed", extra={"view_mode": target.value})
        return True

    def toggle(self) -> ViewMode:
        target = ViewMode.MANAGEMENT if self.mode == ViewMode.EMPLOYEE else ViewMode.EMPLOYEE
        self.show(target)
        return target
