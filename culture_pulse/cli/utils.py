"""Utility helpers shared across CLI command modules."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer

from culture_pulse.core.feedback_records import MAX_MOOD, MIN_MOOD

logger = logging.getLogger(__name__)

QUIT_WORDS = frozenset({"q", "quit", "exit"})


def _cli():
    return sys.modules["culture_pulse.cli"]


def apply_log_override(log_level: Optional[str]) -> None:
    """Override logging level for the current invocation."""

    if not log_level or not isinstance(log_level, str):
        return
    try:
        _cli().set_runtime_level(log_level)
        logger.info("Log level overridden to %s", log_level.upper())
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_mood(response: str) -> Optional[int]:
    """Convert picker input into a mood; blank input means nothing was picked.

    Raises:
        typer.BadParameter: If the input is not a number on the 1-5 scale.
    """

    cleaned = response.strip()
    if not cleaned:
        return None
    try:
        value = int(cleaned)
    except ValueError as exc:
        raise typer.BadParameter(
            f"Mood must be a number between {MIN_MOOD} and {MAX_MOOD}: {cleaned}"
        ) from exc
    if not MIN_MOOD <= value <= MAX_MOOD:
        raise typer.BadParameter(
            f"Mood must be a number between {MIN_MOOD} and {MAX_MOOD}: {cleaned}"
        )
    return value


def prompt_mood(label: str = "Pick your mood (1-5)") -> Optional[int]:
    """Prompt for a mood until a valid one is entered or the input is left blank."""

    while True:
        response = typer.prompt(label, default="", show_default=False)
        try:
            return parse_mood(response)
        except typer.BadParameter as exc:
            _cli().console.print(f"[red]{exc}[/]")


def prompt_comment(label: str = "Any specific feedback or comments?") -> str:
    response = typer.prompt(label, default="", show_default=False)
    return response.strip()


__all__ = [
    "QUIT_WORDS",
    "apply_log_override",
    "parse_mood",
    "prompt_comment",
    "prompt_mood",
]
