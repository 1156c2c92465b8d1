"""Rich renderers for CLI outputs."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from culture_pulse.cli.io import console
from culture_pulse.core.feedback_records import MOOD_SCALE, mood_level, mood_tone

_TONE_STYLES = {"positive": "green", "neutral": "yellow", "negative": "red"}
_BAR_WIDTH = 30


def render_mood_picker() -> None:
    """Show the five selectable moods."""

    table = Table(title="How are you feeling today?", show_header=False, box=None)
    for _ in MOOD_SCALE:
        table.add_column(justify="center")
    table.add_row(*(f"[bold]{level.value}[/]" for level in MOOD_SCALE))
    table.add_row(*(level.icon for level in MOOD_SCALE))
    table.add_row(*(f"[dim]{level.label}[/]" for level in MOOD_SCALE))
    console.print(table)


def render_submission_confirmation() -> None:
    console.print(
        Panel(
            "✨ [bold green]Feedback Shared![/]\n"
            "Your voice matters. Thank you for contributing anonymously to our culture.",
            title="Thank you",
            border_style="green",
        )
    )


def render_dashboard(summary: Mapping[str, Any], plan: Mapping[str, Any] | None) -> None:
    """Display sentiment, distribution, the current plan and recent comments."""

    count = summary.get("response_count", 0)
    average = float(summary.get("average_mood", 0.0))
    console.print(
        Panel(
            f"[bold]{average:.1f}[/] out of 5.0 avg\n"
            f"[dim]Based on {count} anonymous responses[/]",
            title="Overall Sentiment",
        )
    )
    render_histogram(summary.get("histogram") or [])
    if plan:
        render_action_plan(plan)
    else:
        console.print(
            Panel(
                "Run [bold]culture-pulse plan[/] to reveal your AI-powered management roadmap.",
                title="AI Insights",
            )
        )
    render_recent_feedback(summary.get("recent") or [])


def render_histogram(histogram: Sequence[Mapping[str, int]]) -> None:
    """Draw one horizontal bar per mood bucket."""

    peak = max((bucket["count"] for bucket in histogram), default=0)
    table = Table(title="Mood Distribution", show_header=False, box=None)
    table.add_column(justify="right")
    table.add_column()
    table.add_column(justify="right")
    for bucket in histogram:
        level = mood_level(bucket["mood"])
        width = round(bucket["count"] / peak * _BAR_WIDTH) if peak else 0
        style = _TONE_STYLES[mood_tone(level.value)]
        table.add_row(
            f"{level.icon} {level.label}",
            f"[{style}]{'█' * width}[/]",
            str(bucket["count"]),
        )
    console.print(table)


def render_recent_feedback(records: Sequence[Mapping[str, Any]]) -> None:
    """List the most recent submissions, newest first."""

    if not records:
        console.print(
            Panel("[italic dim]No feedback received yet.[/]", title="Raw Feedback (Anonymous)")
        )
        return

    lines: list[str] = []
    for record in records:
        level = mood_level(record["mood"])
        style = _TONE_STYLES[mood_tone(level.value)]
        comment = escape(record.get("comment") or "") or "[italic dim]No comment provided[/]"
        when = datetime.fromtimestamp(record["timestamp"] / 1000).strftime("%H:%M:%S")
        lines.append(f"[{style}]{level.icon}[/] {comment}\n   [dim]{when} • Anonymous[/]")
    console.print(Panel("\n".join(lines), title="Raw Feedback (Anonymous)"))


def render_action_plan(plan: Mapping[str, Any]) -> None:
    """Show the plan summary followed by its three steps."""

    lines = [f'[italic]"{escape(plan.get("summary", ""))}"[/]', ""]
    for index, key in enumerate(("point1", "point2", "point3"), start=1):
        lines.append(f"[bold]Step {index}[/]\n{escape(plan.get(key, ''))}")
    console.print(Panel("\n".join(lines), title="✨ AI Insights", border_style="magenta"))


def render_view_mode(mode: str) -> None:
    label = "Feedback" if mode == "EMPLOYEE" else "Dashboard"
    console.print(Panel(f"Current view: [bold]{label}[/] ({mode})", title="View"))


__all__ = [
    "render_action_plan",
    "render_dashboard",
    "render_histogram",
    "render_mood_picker",
    "render_recent_feedback",
    "render_submission_confirmation",
    "render_view_mode",
]
