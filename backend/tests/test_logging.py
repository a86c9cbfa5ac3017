"""Tests for structured logging."""

import logging

import orjson

from doc_vault.core.logging import JsonFormatter, log_context


def test_json_formatter_nests_context() -> None:
    record = logging.LogRecord("doc_vault.test", logging.INFO, __file__, 1, "saved %s", ("doc_1",), None)
    for key, value in log_context(document_id="doc_1", category="Finance").items():
        setattr(record, key, value)

    payload = orjson.loads(JsonFormatter().format(record))

    assert payload["message"] == "saved doc_1"
    assert payload["level"] == "INFO"
    assert payload["context"] == {"document_id": "doc_1", "category": "Finance"}


def test_record_without_context_has_no_context_key() -> None:
    record = logging.LogRecord("doc_vault.test", logging.WARNING, __file__, 1, "plain", (), None)
    assert "context" not in orjson.loads(JsonFormatter().format(record))
