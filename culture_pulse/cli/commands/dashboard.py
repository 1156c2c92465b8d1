"""Manager-facing dashboard commands."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Optional

import typer

from culture_pulse.cli.io import console
from culture_pulse.cli.renderers import render_action_plan, render_dashboard, render_view_mode
from culture_pulse.cli.utils import apply_log_override
from culture_pulse.core.feedback_records import ViewMode
from culture_pulse.services.action_plan_generator import ActionPlanGenerationError
from culture_pulse.services.dashboard_service import (
    NoFeedbackError,
    PlanRequestInProgressError,
)
from culture_pulse.services.view_controller import ViewController

logger = logging.getLogger(__name__)

PLAN_FAILED_MESSAGE = "AI summary failed. Please try again later."


def _cli() -> Any:
    return sys.modules["culture_pulse.cli"]


def dashboard(
    recent: Optional[int] = typer.Option(
        None,
        "--recent",
        "-n",
        min=0,
        help="Number of recent comments to list (defaults to the configured limit).",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Emit raw JSON instead of rendered panels.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    ),
) -> None:
    """Show overall sentiment, mood distribution and recent comments."""

    apply_log_override(log_level)
    cli_module = _cli()
    state = cli_module.get_state()
    ViewController(state).show(ViewMode.MANAGEMENT)
    state.save()

    limit = state.recent_limit if recent is None else recent
    result = cli_module.get_orchestrator().execute(
        "dashboard_summary", {"recent_limit": limit}
    )
    summary = result.get("summary") or {}
    if raw:
        console.print_json(data={"summary": summary, "plan": state.current_plan})
        return
    render_dashboard(summary, state.current_plan)


def plan(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    ),
) -> None:
    """Turn raw feedback into a 3-point action plan."""

    apply_log_override(log_level)
    cli_module = _cli()
    state = cli_module.get_state()
    ViewController(state).show(ViewMode.MANAGEMENT)

    orchestrator = cli_module.get_orchestrator()
    try:
        with console.status("Processing..."):
            result = asyncio.run(orchestrator.execute_async("generate_action_plan", {}))
    except NoFeedbackError:
        state.save()
        console.print("[yellow]No feedback received yet. Nothing to analyze.[/]")
        return
    except PlanRequestInProgressError as exc:
        console.print(f"[yellow]{exc}[/]")
        raise typer.Exit(code=1) from exc
    except ActionPlanGenerationError as exc:
        logger.warning("Plan generation failed: %s", exc.__cause__ or exc)
        state.save()
        console.print(f"[red]{PLAN_FAILED_MESSAGE}[/]")
        raise typer.Exit(code=1) from exc

    state.current_plan = result.get("plan")
    state.save()
    render_action_plan(state.current_plan or {})


def reset(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Clear without confirmation prompt.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    ),
) -> None:
    """Erase all feedback data. This cannot be undone."""

    apply_log_override(log_level)
    cli_module = _cli()
    state = cli_module.get_state()

    if not force and not typer.confirm("Clear all feedback data? This cannot be undone."):
        console.print("[yellow]Feedback unchanged.[/]")
        return

    cli_module.get_orchestrator().execute("reset_feedback", {})
    state.current_plan = None
    state.save()
    console.print("[green]All feedback cleared.[/]")


def view(
    mode: Optional[str] = typer.Argument(
        None,
        help="View to switch to: employee or management. Omit to show the current view.",
    ),
) -> None:
    """Show or switch the current view."""

    state = _cli().get_state()
    controller = ViewController(state)
    if mode is not None:
        try:
            controller.show(mode)
        except ValueError as exc:
            raise typer.BadParameter(
                f"Unknown view '{mode}'. Use employee or management."
            ) from exc
        state.save()
    render_view_mode(controller.mode.value)


def seed(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Replace existing feedback with the sample records.",
    ),
) -> None:
    """Load illustrative sample feedback (ids prefixed with ``sample-``)."""

    initializer = _cli().create_initializer()
    if force:
        count = initializer.refresh()
        console.print(f"[green]Loaded {count} sample records.[/]")
        return

    if initializer.initialize():
        console.print("[green]Sample feedback loaded.[/]")
    else:
        console.print(
            "[yellow]Feedback store already initialized; use --force to replace it.[/]"
        )


__all__ = ["dashboard", "plan", "reset", "seed", "view"]
