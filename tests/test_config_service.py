from __future__ import annotations

from pathlib import Path

import pytest

from culture_pulse.core.config_loader import ConfigLoader, load_config
from culture_pulse.services.config_service import (
    DEFAULT_FEEDBACK_SLOT,
    DEFAULT_RECENT_LIMIT,
    DEFAULT_RESET_DELAY_SECONDS,
    ConfigService,
)
from tests.helpers.factories import write_config

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def test_project_config_exposes_defaults() -> None:
    service = ConfigService(config_path=PROJECT_ROOT / "config")

    assert service.reset_delay_seconds == 3.0
    assert service.recent_limit == 5
    assert service.feedback_slot == "culture_pulse_data"
    assert service.seed_samples is True
    config = service.get_workflow_model_config("generate_action_plan")
    assert config.model == "gemini/gemini-2.5-flash"
    assert config.provider == "gemini"
    assert config.attempts == 1


def test_missing_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    service = ConfigService(config_path=write_config(tmp_path / "config"))

    assert service.reset_delay_seconds == DEFAULT_RESET_DELAY_SECONDS
    assert service.recent_limit == DEFAULT_RECENT_LIMIT
    assert service.feedback_slot == DEFAULT_FEEDBACK_SLOT
    assert service.seed_samples is False
    assert service.sqlite_path == ":memory:"


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    settings = (
        "intake: {reset_delay_seconds: -1}\n"
        "dashboard: {recent_limit: 'many'}\n"
    )
    service = ConfigService(config_path=write_config(tmp_path / "config", settings=settings))

    assert service.reset_delay_seconds == DEFAULT_RESET_DELAY_SECONDS
    assert service.recent_limit == DEFAULT_RECENT_LIMIT


def test_unknown_workflow_raises_key_error(tmp_path: Path) -> None:
    service = ConfigService(config_path=write_config(tmp_path / "config"))

    with pytest.raises(KeyError):
        service.get_workflow_model_config("unknown")


def test_invalid_attempts_rejected(tmp_path: Path) -> None:
    models = (
        "workflows:\n"
        "  generate_action_plan: {model: 'gemini/x', attempts: 0}\n"
    )
    service = ConfigService(config_path=write_config(tmp_path / "config", models=models))

    with pytest.raises(ValueError):
        service.get_workflow_model_config("generate_action_plan")


def test_provider_values_expand_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    providers = (
        "providers:\n"
        "  azure_openai:\n"
        "    api_base: '${TEST_AZURE_ENDPOINT}'\n"
        "    api_key_env: 'TEST_AZURE_KEY'\n"
    )
    monkeypatch.setenv("TEST_AZURE_ENDPOINT", "https://azure.example.com")
    service = ConfigService(
        config_path=write_config(tmp_path / "config", providers=providers)
    )

    provider = service.providers["azure_openai"]
    assert provider["api_base"] == "https://azure.example.com"
    assert provider["api_key_env"] == "TEST_AZURE_KEY"


def test_as_dict_never_contains_key_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GEMINI_TEST_KEY", "super-secret")
    service = ConfigService(config_path=write_config(tmp_path / "config"))

    payload = service.as_dict()

    assert "super-secret" not in repr(payload)
    assert payload["workflows"]["generate_action_plan"]["attempts"] == 1
    assert payload["database"]["feedback_slot"] == DEFAULT_FEEDBACK_SLOT


def test_loader_rejects_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader(base_path=tmp_path / "absent")


def test_loader_reads_from_environment_path(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_dir = write_config(tmp_path / "config")
    monkeypatch.setenv("CULTURE_PULSE_CONFIG_PATH", str(config_dir))

    assert load_config("settings") == {"app": {"name": "test"}}


def test_loader_rejects_non_mapping(tmp_path: Path) -> None:
    config_dir = write_config(tmp_path / "config", settings="- one\n- two\n")

    with pytest.raises(ValueError):
        ConfigLoader(base_path=config_dir).load("settings")


def test_loader_accepts_yml_suffix_and_lists_documents(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "extra.yml").write_text("key: value\n", encoding="utf-8")
    (config_dir / "notes.txt").write_text("ignored", encoding="utf-8")
    loader = ConfigLoader(base_path=config_dir)

    assert loader.load("extra") == {"key": "value"}
    assert loader.load("extra.yml") == {"key": "value"}
    assert loader.available() == ["extra"]


def test_missing_document_names_available_ones(tmp_path: Path) -> None:
    config_dir = write_config(tmp_path / "config")

    with pytest.raises(FileNotFoundError, match="available: database, models"):
        ConfigLoader(base_path=config_dir).load("absent")
