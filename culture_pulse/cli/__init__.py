"""CulturePulse CLI package."""

from __future__ import annotations

import logging

import typer

from culture_pulse.cli.commands.dashboard import dashboard, plan, reset, seed, view
from culture_pulse.cli.commands.intake import kiosk, submit
from culture_pulse.cli.commands.settings import settings_show
from culture_pulse.cli.io import console
from culture_pulse.cli.renderers import (
    render_action_plan,
    render_dashboard,
    render_histogram,
    render_mood_picker,
    render_recent_feedback,
    render_submission_confirmation,
    render_view_mode,
)
from culture_pulse.cli.runtime import (
    create_initializer,
    get_orchestrator,
    get_runtime,
    get_state,
    initialize_runtime,
    set_runtime_level,
)
from culture_pulse.cli.state import AppState, PROJECT_ROOT, STATE_PATH
from culture_pulse.cli.utils import apply_log_override, parse_mood, prompt_comment, prompt_mood
from culture_pulse.core.llm_gateway import LLMGateway
from culture_pulse.core.logging_setup import configure_logging
from culture_pulse.core.orchestrator import Orchestrator
from culture_pulse.db.feedback_store import FeedbackStore
from culture_pulse.db.sqlite_client import SQLiteClient
from culture_pulse.services.action_plan_generator import ActionPlanGenerator
from culture_pulse.services.config_service import ConfigService
from culture_pulse.services.dashboard_service import DashboardService
from culture_pulse.services.data_initializer import SampleDataInitializer
from culture_pulse.services.intake_service import FeedbackIntake
from culture_pulse.services.prompt_service import PromptService
from culture_pulse.workflows.dashboard_summary import DashboardSummaryWorkflow
from culture_pulse.workflows.generate_action_plan import GenerateActionPlanWorkflow
from culture_pulse.workflows.reset_feedback import ResetFeedbackWorkflow
from culture_pulse.workflows.submit_feedback import SubmitFeedbackWorkflow

logger = logging.getLogger(__name__)

# Typer application ----------------------------------------------------------

app = typer.Typer(
    add_completion=False,
    help="CulturePulse: anonymous mood feedback and AI action plans.",
)

app.command()(submit)
app.command()(kiosk)
app.command()(dashboard)
app.command()(plan)
app.command()(reset)
app.command()(view)
app.command()(seed)
app.command("settings")(settings_show)


def main() -> None:
    """CLI entry point."""

    app()


__all__: list[str] = [
    # Typer app / entrypoint
    "app",
    "main",
    # Console & logging
    "console",
    "logger",
    "configure_logging",
    # State & runtime
    "AppState",
    "PROJECT_ROOT",
    "STATE_PATH",
    "create_initializer",
    "get_orchestrator",
    "get_runtime",
    "get_state",
    "initialize_runtime",
    "set_runtime_level",
    # Commands
    "submit",
    "kiosk",
    "dashboard",
    "plan",
    "reset",
    "view",
    "seed",
    "settings_show",
    # Renderers
    "render_action_plan",
    "render_dashboard",
    "render_histogram",
    "render_mood_picker",
    "render_recent_feedback",
    "render_submission_confirmation",
    "render_view_mode",
    # Utilities
    "apply_log_override",
    "parse_mood",
    "prompt_comment",
    "prompt_mood",
    # Classes re-exported so tests can substitute them
    "ActionPlanGenerator",
    "ConfigService",
    "DashboardService",
    "DashboardSummaryWorkflow",
    "FeedbackIntake",
    "FeedbackStore",
    "GenerateActionPlanWorkflow",
    "LLMGateway",
    "Orchestrator",
    "PromptService",
    "ResetFeedbackWorkflow",
    "SQLiteClient",
    "SampleDataInitializer",
    "SubmitFeedbackWorkflow",
]
