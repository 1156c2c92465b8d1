"""Settings command for the CulturePulse CLI."""

from __future__ import annotations

import sys

import typer

from culture_pulse.cli.io import console


def _cli():
    return sys.modules["culture_pulse.cli"]


def settings_show() -> None:
    """Display the effective configuration (API keys are never shown)."""

    try:
        config_service = _cli().ConfigService()
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    console.print_json(data=config_service.as_dict())


__all__ = ["settings_show"]
