"""Runtime wiring for the CulturePulse CLI."""

from __future__ import annotations

import logging
from sys import modules
from typing import Any

from culture_pulse.cli.state import AppState, PROJECT_ROOT
from culture_pulse.core.llm_gateway import LLMGateway
from culture_pulse.core.logging_setup import configure_logging
from culture_pulse.core.logging_setup import set_runtime_level  # re-export via utils
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

SAMPLE_DATASET_PATH = PROJECT_ROOT / "data" / "sample_feedback.json"

_RUNTIME_CACHE: tuple[Orchestrator, AppState] | None = None

_DEFAULTS: dict[str, Any] = {
    "ConfigService": ConfigService,
    "SQLiteClient": SQLiteClient,
    "FeedbackStore": FeedbackStore,
    "SampleDataInitializer": SampleDataInitializer,
    "LLMGateway": LLMGateway,
    "PromptService": PromptService,
    "ActionPlanGenerator": ActionPlanGenerator,
    "FeedbackIntake": FeedbackIntake,
    "DashboardService": DashboardService,
    "SubmitFeedbackWorkflow": SubmitFeedbackWorkflow,
    "DashboardSummaryWorkflow": DashboardSummaryWorkflow,
    "GenerateActionPlanWorkflow": GenerateActionPlanWorkflow,
    "ResetFeedbackWorkflow": ResetFeedbackWorkflow,
    "Orchestrator": Orchestrator,
}


def initialize_runtime() -> tuple[Orchestrator, AppState]:
    """Build services, workflows and the hydrated session state."""

    config_service = _resolve_dependency("ConfigService")()
    configure_logging(config_service.logging_config)
    logger.debug("Runtime initialization starting.")

    store = _create_store(config_service)
    if config_service.seed_samples:
        initializer = _resolve_dependency("SampleDataInitializer")(
            store=store, dataset_path=SAMPLE_DATASET_PATH
        )
        initializer.initialize()

    llm_gateway = _resolve_dependency("LLMGateway")(config_service=config_service)
    prompt_service = _resolve_dependency("PromptService")()
    plan_generator = _resolve_dependency("ActionPlanGenerator")(
        llm_gateway=llm_gateway, prompt_service=prompt_service
    )
    intake = _resolve_dependency("FeedbackIntake")(store=store)
    dashboard_service = _resolve_dependency("DashboardService")(
        store=store,
        plan_generator=plan_generator,
        recent_limit=config_service.recent_limit,
    )

    orchestrator = _resolve_dependency("Orchestrator")(
        workflows={
            "submit_feedback": _resolve_dependency("SubmitFeedbackWorkflow")(
                intake=intake
            ),
            "dashboard_summary": _resolve_dependency("DashboardSummaryWorkflow")(
                dashboard_service=dashboard_service
            ),
            "generate_action_plan": _resolve_dependency("GenerateActionPlanWorkflow")(
                dashboard_service=dashboard_service
            ),
            "reset_feedback": _resolve_dependency("ResetFeedbackWorkflow")(
                dashboard_service=dashboard_service
            ),
        }
    )

    state = AppState.load()
    state.intake = intake
    state.reset_delay = config_service.reset_delay_seconds
    state.recent_limit = config_service.recent_limit
    return orchestrator, state


def get_runtime() -> tuple[Orchestrator, AppState]:
    """Return the lazily-initialized orchestrator and CLI state."""

    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        _RUNTIME_CACHE = initialize_runtime()
    return _RUNTIME_CACHE


def get_orchestrator() -> Orchestrator:
    orchestrator, _ = get_runtime()
    return orchestrator


def get_state() -> AppState:
    _, state = get_runtime()
    return state


def create_initializer() -> SampleDataInitializer:
    """Return a sample-data initializer bound to the configured store."""

    config_service = _resolve_dependency("ConfigService")()
    store = _create_store(config_service)
    return _resolve_dependency("SampleDataInitializer")(
        store=store, dataset_path=SAMPLE_DATASET_PATH
    )


def _create_store(config_service: ConfigService) -> FeedbackStore:
    sqlite_client = _resolve_dependency("SQLiteClient")(config_service.sqlite_path)
    sqlite_client.initialize_schema()
    return _resolve_dependency("FeedbackStore")(
        sqlite_client=sqlite_client, slot=config_service.feedback_slot
    )


def _resolve_dependency(name: str) -> Any:
    """Return a dependency, preferring overrides on the cli package."""

    cli_module = modules.get("culture_pulse.cli")
    if cli_module is not None and hasattr(cli_module, name):
        return getattr(cli_module, name)
    return _DEFAULTS[name]


__all__ = [
    "create_initializer",
    "get_orchestrator",
    "get_runtime",
    "get_state",
    "initialize_runtime",
    "set_runtime_level",
]
