"""Prompt template registry.

Updates:
    v0.1.0 - 2026-10-19 - Registry loader with ``$placeholder`` rendering.
"""

from __future__ import annotations

import os
from pathlib import Path
from string import Template
from typing import Dict

import yaml

PROMPTS_PATH_ENV = "CULTURE_PULSE_PROMPTS_PATH"
REGISTRY_FILE = "registry.yaml"


class PromptService:
    """Serves the prompt templates named in ``registry.yaml``.

    Templates use ``$name`` placeholders so that literal braces in a prompt
    (for example a JSON example) need no escaping.
    """

    def __init__(self, base_path: Path | None = None) -> None:
        """Read the registry from ``base_path`` or ``$CULTURE_PULSE_PROMPTS_PATH``.

        Raises:
            FileNotFoundError: If the directory or its registry file is missing.
            ValueError: If the registry is not a name-to-file mapping.
        """

        directory = base_path or Path(os.environ.get(PROMPTS_PATH_ENV, "prompts"))
        self._base_path = directory.resolve()
        registry_path = self._base_path / REGISTRY_FILE
        if not registry_path.is_file():
            raise FileNotFoundError(f"Prompt registry missing: {registry_path}")

        self._registry = self._parse_registry(
            yaml.safe_load(registry_path.read_text(encoding="utf-8"))
        )
        self._templates: Dict[str, Template] = {}

    @property
    def registry(self) -> Dict[str, Path]:
        return dict(self._registry)

    def get_prompt(self, name: str) -> str:
        """Return the raw template text registered under ``name``.

        Raises:
            KeyError: If ``name`` is not registered.
            FileNotFoundError: If the registered file does not exist.
        """

        try:
            path = self._registry[name]
        except KeyError:
            raise KeyError(f"Prompt '{name}' is not defined in the registry.") from None
        if not path.is_file():
            raise FileNotFoundError(f"Prompt file not found: {path}")
        return path.read_text(encoding="utf-8")

    def render(self, name: str, **values: str) -> str:
        """Return the template with every placeholder substituted.

        Substituted values are inserted verbatim; a ``$`` inside a value is
        never expanded.

        Raises:
            KeyError: If the template references a value that was not supplied.
        """

        template = self._templates.get(name)
        if template is None:
            template = self._templates[name] = Template(self.get_prompt(name))
        return template.substitute(values)

    def _parse_registry(self, raw: object) -> Dict[str, Path]:
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError(f"Prompt registry must be a mapping, got {type(raw).__name__}")

        entries: Dict[str, Path] = {}
        for name, filename in raw.items():
            if not isinstance(name, str) or not isinstance(filename, (str, os.PathLike)):
                raise ValueError(f"Invalid prompt registry entry: {name!r}: {filename!r}")
            path = Path(filename)
            entries[name] = path if path.is_absolute() else (self._base_path / path).resolve()
        return entries
