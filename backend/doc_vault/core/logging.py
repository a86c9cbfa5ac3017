"""Logging utilities for Doc Vault.

Structured fields travel as ``extra`` entries prefixed with ``ctx_``; build
them with :func:`log_context` so the JSON formatter picks them up.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import orjson

CONTEXT_PREFIX = "ctx_"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_context(**fields: Any) -> dict[str, Any]:
    """``log_context(document_id=x)`` -> ``{"ctx_document_id": x}``."""
    return {f"{CONTEXT_PREFIX}{key}": value for key, value in fields.items()}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, context fields flattened in without the prefix."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {
            key[len(CONTEXT_PREFIX) :]: value
            for key, value in record.__dict__.items()
            if key.startswith(CONTEXT_PREFIX)
        }
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # Vectors, paths and enums fall back to str().
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(level: str | int | None = None, use_json: bool = True) -> None:
    """Install a single stdout handler on the root logger.

    ``level`` defaults to ``DOCV_LOG_LEVEL`` (``INFO`` when unset).
    """
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level or os.environ.get("DOCV_LOG_LEVEL", "INFO").upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if use_json else logging.Formatter(_TEXT_FORMAT))
    root.handlers = [handler]


def get_logger(name: str = "doc_vault") -> logging.Logger:
    """Return a named logger, configuring the root logger on first use."""
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["CONTEXT_PREFIX", "JsonFormatter", "configure_logging", "get_logger", "log_context"]
