"""YAML configuration files for CulturePulse.

Updates:
    v0.1.0 - 2026-10-19 - Cached loader for ``config/`` with ``.yaml``/``.yml`` lookup.
"""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

CONFIG_PATH_ENV = "CULTURE_PULSE_CONFIG_PATH"
CONFIG_SUFFIXES = (".yaml", ".yml")


class ConfigLoader:
    """Reads named YAML documents from one configuration directory.

    ``load("settings")`` finds ``settings.yaml`` (or ``settings.yml``). Parsed
    documents are cached per loader; tests clear the cache with
    ``ConfigLoader.load.cache_clear()``.
    """

    def __init__(self, base_path: Path | None = None) -> None:
        """Bind the loader to ``base_path`` or ``$CULTURE_PULSE_CONFIG_PATH``.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """

        directory = base_path or Path(os.environ.get(CONFIG_PATH_ENV, "config"))
        self._base_path = directory.resolve()
        if not self._base_path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {self._base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def available(self) -> List[str]:
        """Return the names of the YAML documents in the directory."""

        return sorted(
            path.stem
            for path in self._base_path.iterdir()
            if path.is_file() and path.suffix in CONFIG_SUFFIXES
        )

    @functools.lru_cache(maxsize=None)
    def load(self, name: str) -> Dict[str, Any]:
        """Parse the document called ``name``; an empty file yields ``{}``.

        Raises:
            FileNotFoundError: If no ``.yaml``/``.yml`` file has that name.
            ValueError: If the document is not a mapping.
        """

        path = self._locate(name)
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ValueError(
                f"Config file {path.name} must contain a mapping, got {type(document).__name__}"
            )
        return document

    def _locate(self, name: str) -> Path:
        stem = Path(name).stem if Path(name).suffix in CONFIG_SUFFIXES else name
        for suffix in CONFIG_SUFFIXES:
            candidate = self._base_path / f"{stem}{suffix}"
            if candidate.is_file():
                return candidate
        known = ", ".join(self.available()) or "none"
        raise FileNotFoundError(
            f"Config file '{stem}' not found in {self._base_path} (available: {known})"
        )


def load_config(name: str, base_path: Path | None = None) -> Dict[str, Any]:
    """Load one document without keeping a loader around."""

    return ConfigLoader(base_path=base_path).load(name)
