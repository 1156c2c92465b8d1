"""CLI runtime state management."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

from culture_pulse.core.feedback_records import ViewMode

if TYPE_CHECKING:
    from culture_pulse.services.intake_service import FeedbackIntake

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
STATE_PATH = Path(
    os.environ.get("CULTURE_PULSE_STATE_PATH", PROJECT_ROOT / "data" / "state.json")
)


@dataclass
class AppState:
    """Serializable session state: the current view and the plan on display."""

    view_mode: ViewMode = ViewMode.EMPLOYEE
    current_plan: Optional[dict[str, Any]] = None
    intake: Optional["FeedbackIntake"] = field(default=None, repr=False, compare=False)
    reset_delay: float = field(default=3.0, repr=False, compare=False)
    recent_limit: int = field(default=5, repr=False, compare=False)

    @classmethod
    def load(cls, path: Path = STATE_PATH) -> "AppState":
        """Load application state from disk; unreadable state starts fresh."""

        data: dict[str, Any] = {}
        if path.exists():
            try:
                loaded = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning("Ignoring unreadable state file %s: %s", path, exc)
            else:
                if isinstance(loaded, dict):
                    data = loaded
        try:
            view_mode = ViewMode(data.get("view_mode", ViewMode.EMPLOYEE.value))
        except ValueError:
            view_mode = ViewMode.EMPLOYEE
        plan = data.get("current_plan")
        return cls(
            view_mode=view_mode,
            current_plan=plan if isinstance(plan, dict) else None,
        )

    def save(self, path: Path = STATE_PATH) -> None:
        """Persist application state to disk."""

        payload = {
            "view_mode": self.view_mode.value,
            "current_plan": self.current_plan,
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


__all__ = ["AppState", "PROJECT_ROOT", "STATE_PATH"]
