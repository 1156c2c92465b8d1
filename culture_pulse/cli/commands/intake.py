"""Employee-facing intake commands."""

from __future__ import annotations

import logging
import sys
import time
from typing import Any, Optional

import typer

from culture_pulse.cli.io import console
from culture_pulse.cli.renderers import render_mood_picker, render_submission_confirmation
from culture_pulse.cli.utils import (
    QUIT_WORDS,
    apply_log_override,
    parse_mood,
    prompt_comment,
    prompt_mood,
)
from culture_pulse.core.feedback_records import ViewMode
from culture_pulse.services.intake_service import IntakeForm
from culture_pulse.services.view_controller import ViewController

logger = logging.getLogger(__name__)


def _cli() -> Any:
    return sys.modules["culture_pulse.cli"]


def submit(
    mood: Optional[int] = typer.Option(
        None,
        "--mood",
        "-m",
        min=1,
        max=5,
        help="Mood from 1 (awful) to 5 (amazing).",
    ),
    comment: Optional[str] = typer.Option(
        None,
        "--comment",
        "-c",
        help="Optional anonymous comment.",
    ),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive",
        help="Prompt for values that were not supplied via options.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation (e.g., DEBUG, INFO).",
    ),
) -> None:
    """Share how you feel today, anonymously."""

    apply_log_override(log_level)
    cli_module = _cli()
    state = cli_module.get_state()

    if mood is None and interactive:
        render_mood_picker()
        mood = prompt_mood()
    if mood is None:
        raise typer.BadParameter("Select a mood before submitting feedback.")
    if comment is None:
        comment = prompt_comment() if interactive else ""

    try:
        cli_module.get_orchestrator().execute(
            "submit_feedback", {"mood": mood, "comment": comment}
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    ViewController(state).show(ViewMode.EMPLOYEE)
    state.save()
    render_submission_confirmation()


def kiosk(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override logging level for this invocation.",
    ),
) -> None:
    """Collect submissions one after another on a shared terminal.

    After each submission the confirmation stays on screen for the configured
    reset delay, then the form clears for the next person. Enter ``q`` to stop.
    """

    apply_log_override(log_level)
    state = _cli().get_state()
    if state.intake is None:
        raise typer.BadParameter("Feedback intake is not initialized.")

    ViewController(state).show(ViewMode.EMPLOYEE)
    state.save()
    form = IntakeForm(intake=state.intake, reset_delay=state.reset_delay)
    submissions = 0

    while True:
        render_mood_picker()
        response = typer.prompt(
            "Pick your mood (1-5, q to stop)", default="", show_default=False
        ).strip()
        if response.lower() in QUIT_WORDS:
            break
        try:
            selected = parse_mood(response)
        except typer.BadParameter as exc:
            console.print(f"[red]{exc}[/]")
            continue
        if selected is None:
            console.print("[yellow]Select a mood before submitting feedback.[/]")
            continue

        form.select_mood(selected)
        form.set_comment(prompt_comment())
        form.submit()
        submissions += 1
        render_submission_confirmation()

        time.sleep(form.seconds_until_reset())
        form.refresh()
        console.clear()

    logger.info("kiosk_closed", extra={"submissions": submissions})
    console.print(f"[green]Kiosk closed after {submissions} submission(s).[/]")


__all__ = ["kiosk", "submit"]
