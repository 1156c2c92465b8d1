"""Builders for records and config directories used across tests."""

from __future__ import annotations

from pathlib import Path

from culture_pulse.core.feedback_records import FeedbackRecord

DEFAULT_MODELS = (
    "workflows:\n"
    "  generate_action_plan:\n"
    "    model: 'gemini/gemini-2.5-flash'\n"
    "    temperature: 0.2\n"
    "defaults: {provider: gemini}\n"
)

DEFAULT_PROVIDERS = (
    "providers:\n"
    "  gemini:\n"
    "    api_key_env: 'GEMINI_TEST_KEY'\n"
    "    litellm_provider: 'gemini'\n"
)


def write_config(
    config_dir: Path,
    *,
    settings: str = "app: {name: test}\n",
    database: str = "database: {sqlite_path: ':memory:'}\n",
    models: str = DEFAULT_MODELS,
    providers: str = DEFAULT_PROVIDERS,
) -> Path:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "settings.yaml").write_text(settings, encoding="utf-8")
    (config_dir / "database.yaml").write_text(database, encoding="utf-8")
    (config_dir / "models.yaml").write_text(models, encoding="utf-8")
    (config_dir / "providers.yaml").write_text(providers, encoding="utf-8")
    return config_dir


def make_records(*moods: int, comment: str = "Comment {index}") -> list[FeedbackRecord]:
    return [
        FeedbackRecord(
            id=f"rec-{index}",
            mood=mood,
            comment=comment.format(index=index),
            timestamp=1_700_000_000_000 + index,
        )
        for index, mood in enumerate(moods, start=1)
    ]


__all__ = ["DEFAULT_MODELS", "DEFAULT_PROVIDERS", "make_records", "write_config"]
