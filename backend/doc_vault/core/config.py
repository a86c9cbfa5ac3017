"""Application configuration handling.

Values come from three layers, later ones winning: field defaults, an optional
YAML file (``DOCV_CONFIG`` or ``~/.config/doc-vault/config.yaml``) and
``DOCV_*`` environment variables named after the fields.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "DOCV_"
_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
DEFAULT_CONFIG_PATH = Path("~/.config/doc-vault/config.yaml")

# Dotted YAML keys that do not simply match a field name.
_YAML_ALIASES: Mapping[str, str] = {
    "storage.db_path": "db_path",
    "embeddings.model": "embedding_model",
    "search.default_limit": "default_limit",
    "search.recent_limit": "recent_limit",
    "ingest.workers": "ingest_workers",
    "logging.json": "log_json",
    "logging.level": "log_level",
}


class Settings(BaseModel):
    """Runtime configuration for the service, CLI-independent."""

    db_path: Path = Field(default=Path.home() / ".doc-vault" / "vault.db")
    embedding_model: str = Field(default="sinhash-384", min_length=1)
    default_limit: int = Field(default=10, ge=1, le=100)
    recent_limit: int = Field(default=5, ge=1, le=100)
    ingest_workers: int = Field(default=4, ge=1, le=32)
    log_json: bool = True
    log_level: str = "INFO"

    model_config = {
        "validate_assignment": True,
        "extra": "ignore",
    }

    @field_validator("db_path", mode="before")
    @classmethod
    def _expand_db_path(cls, value: Any) -> Path:
        if isinstance(value, (str, Path)):
            return Path(value).expanduser()
        raise TypeError("db_path must be a path or string")

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> str:
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> "Settings":
        """Build settings from the YAML layer (when present) plus the environment."""
        data: dict[str, Any] = {}
        config_path = _resolve_config_path(path)
        if config_path is not None and config_path.exists():
            data.update(_fields_from_yaml(_read_yaml(config_path)))
        data.update(_fields_from_env(os.environ))
        return cls(**data)


def _resolve_config_path(path: Path | None) -> Path | None:
    if path is not None:
        return path.expanduser()
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.exists() else None


def _read_yaml(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{path} must contain a YAML mapping")
    return raw


def _dotted_items(raw: Mapping[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    items: list[tuple[str, Any]] = []
    for key, value in raw.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            items.extend(_dotted_items(value, prefix=f"{dotted}."))
        else:
            items.append((dotted, value))
    return items


def _fields_from_yaml(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map ``section.key`` entries (or bare field names) onto Settings fields."""
    fields: dict[str, Any] = {}
    for dotted, value in _dotted_items(raw):
        name = _YAML_ALIASES.get(dotted, dotted)
        if name in Settings.model_fields:
            fields[name] = value
    return fields


def _fields_from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """``DOCV_DEFAULT_LIMIT=20`` sets ``default_limit``; unknown names are ignored."""
    return {
        name: environ[f"{ENV_PREFIX}{name.upper()}"]
        for name in Settings.model_fields
        if f"{ENV_PREFIX}{name.upper()}" in environ
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor for dependency injection."""
    return Settings.from_yaml()


__all__ = ["ENV_PREFIX", "Settings", "get_settings"]
