"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from doc_vault.core.config import Settings


def test_yaml_sections_and_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(
        "storage:\n  db_path: /ignored/by/env.db\n"
        "search:\n  default_limit: 7\n  recent_limit: 9\n"
        "ingest:\n  workers: 2\n"
        "logging:\n  json: false\n"
    )
    monkeypatch.setenv("DOCV_RECENT_LIMIT", "3")

    settings = Settings.from_yaml(config)

    assert settings.default_limit == 7
    assert settings.recent_limit == 3
    assert settings.ingest_workers == 2
    assert settings.log_json is False
    assert settings.db_path == tmp_path / "vault.db"


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "alt.yaml"
    config.write_text("embeddings:\n  model: sinhash-test\n")
    monkeypatch.setenv("DOCV_CONFIG", str(config))
    assert Settings.from_yaml().embedding_model == "sinhash-test"


def test_defaults_without_config(tmp_path: Path) -> None:
    settings = Settings.from_yaml(tmp_path / "missing.yaml")
    assert settings.default_limit == 10
    assert settings.recent_limit == 5


def test_log_level_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCV_LOG_LEVEL", "debug")
    assert Settings.from_yaml().log_level == "DEBUG"
    monkeypatch.setenv("DOCV_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings.from_yaml()


def test_invalid_limit_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCV_DEFAULT_LIMIT", "0")
    with pytest.raises(ValidationError):
        Settings.from_yaml()
