"""Configuration service for CulturePulse.

Updates:
    v0.1.0 - 2026-10-19 - Settings, database, model and provider sections.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.config_loader import ConfigLoader

DEFAULT_RESET_DELAY_SECONDS = 3.0
DEFAULT_RECENT_LIMIT = 5
DEFAULT_FEEDBACK_SLOT = "culture_pulse_data"
DEFAULT_SQLITE_PATH = "./data/culture_pulse.db"


@dataclass(slots=True, frozen=True)
class WorkflowModelConfig:
    """Workflow-specific model parameters."""

    workflow: str
    model: str
    temperature: float | None = None
    provider: str | None = None
    max_tokens: int | None = None
    attempts: int = 1
    timeout: float | None = None


class ConfigService:
    """Loads and exposes configuration for CulturePulse components."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Read every configuration file once.

        Args:
            config_path (Path | None): Optional override for the configuration directory.
        """

        self._loader = ConfigLoader(base_path=config_path)
        self._settings = self._loader.load("settings")
        self._database = self._loader.load("database")
        self._models = self._loader.load("models")
        self._providers = self._loader.load("providers")

    @property
    def config_path(self) -> Path:
        return self._loader.base_path

    @property
    def app_metadata(self) -> dict[str, Any]:
        """Return general application metadata."""
        return self._section(self._settings, "app")

    @property
    def logging_config(self) -> dict[str, Any]:
        """Return logging configuration settings."""
        return self._section(self._settings, "logging")

    @property
    def database_config(self) -> dict[str, Any]:
        """Return database configuration values."""
        return self._section(self._database, "database")

    @property
    def sqlite_path(self) -> str:
        return str(self.database_config.get("sqlite_path") or DEFAULT_SQLITE_PATH)

    @property
    def feedback_slot(self) -> str:
        return str(self.database_config.get("feedback_slot") or DEFAULT_FEEDBACK_SLOT)

    @property
    def reset_delay_seconds(self) -> float:
        """Seconds the intake confirmation stays visible before the form resets."""
        intake = self._section(self._settings, "intake")
        value = intake.get("reset_delay_seconds", DEFAULT_RESET_DELAY_SECONDS)
        return float(value) if isinstance(value, (int, float)) and value >= 0 else DEFAULT_RESET_DELAY_SECONDS

    @property
    def recent_limit(self) -> int:
        dashboard = self._section(self._settings, "dashboard")
        value = dashboard.get("recent_limit", DEFAULT_RECENT_LIMIT)
        return value if isinstance(value, int) and value > 0 else DEFAULT_RECENT_LIMIT

    @property
    def seed_samples(self) -> bool:
        """Whether an uninitialized store is seeded with illustrative records."""
        bootstrap = self._section(self._settings, "bootstrap")
        return bool(bootstrap.get("seed_samples", False))

    @property
    def providers(self) -> dict[str, Any]:
        """Return provider configuration registry with ``${VAR}`` values expanded."""
        provider_section = self._providers.get("providers", {})
        if not isinstance(provider_section, dict):
            return {}
        return {
            name: self._expand_env_values(config)
            for name, config in provider_section.items()
        }

    def get_workflow_model_config(self, workflow: str) -> WorkflowModelConfig:
        """Return configuration for the requested workflow.

        Args:
            workflow (str): Name of the workflow to retrieve.

        Returns:
            WorkflowModelConfig: Workflow-specific model settings.

        Raises:
            KeyError: If the workflow configuration is missing.
            ValueError: If the workflow has no model configured.
        """

        workflows = self._models.get("workflows", {})
        defaults = self._models.get("defaults", {})
        data = workflows.get(workflow) if isinstance(workflows, dict) else None

        if not isinstance(data, dict):
            raise KeyError(f"Workflow config not found for '{workflow}'")

        model = data.get("model", defaults.get("model"))
        if not isinstance(model, str) or not model.strip():
            raise ValueError(
                f"Workflow config for '{workflow}' requires a non-empty 'model' value."
            )

        attempts = data.get("attempts", defaults.get("attempts", 1))
        if not isinstance(attempts, int) or attempts < 1:
            raise ValueError(f"Workflow config for '{workflow}' requires attempts >= 1.")

        return WorkflowModelConfig(
            workflow=workflow,
            model=model.strip(),
            temperature=data.get("temperature", defaults.get("temperature")),
            provider=data.get("provider", defaults.get("provider")),
            max_tokens=data.get("max_tokens"),
            attempts=attempts,
            timeout=data.get("timeout", defaults.get("timeout")),
        )

    def iter_workflow_configs(self) -> dict[str, WorkflowModelConfig]:
        """Return mapping of workflow names to configuration data."""

        workflows = self._models.get("workflows", {})
        return {name: self.get_workflow_model_config(name) for name in workflows}

    def as_dict(self) -> dict[str, Any]:
        """Return the effective configuration for display.

        Provider entries only show the environment variable names, never key values.
        """

        return {
            "config_path": str(self.config_path),
            "app": self.app_metadata,
            "logging": self.logging_config,
            "database": {
                "sqlite_path": self.sqlite_path,
                "feedback_slot": self.feedback_slot,
            },
            "intake": {"reset_delay_seconds": self.reset_delay_seconds},
            "dashboard": {"recent_limit": self.recent_limit},
            "bootstrap": {"seed_samples": self.seed_samples},
            "workflows": {
                name: {
                    "model": config.model,
                    "provider": config.provider,
                    "temperature": config.temperature,
                    "max_tokens": config.max_tokens,
                    "attempts": config.attempts,
                    "timeout": config.timeout,
                }
                for name, config in self.iter_workflow_configs().items()
            },
            "providers": self.providers,
        }

    @staticmethod
    def _section(source: dict[str, Any], name: str) -> dict[str, Any]:
        section = source.get(name, {})
        return dict(section) if isinstance(section, dict) else {}

    @staticmethod
    def _expand_env_values(value: Any, *, current_key: str | None = None) -> Any:
        if isinstance(value, dict):
            return {
                key: ConfigService._expand_env_values(entry, current_key=key)
                for key, entry in value.items()
            }
        if isinstance(value, list):
            return [
                ConfigService._expand_env_values(item, current_key=current_key)
                for item in value
            ]
        if isinstance(value, str) and current_key != "api_key_env":
            return os.path.expandvars(value)
        return value
