"""CLI tests with the HTTP layer stubbed out."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from doc_vault.cli import main as cli

runner = CliRunner()


class FakeResponse:
    def __init__(self, payload: object, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = str(payload)

    def json(self) -> object:
        return self._payload


@pytest.fixture
def calls(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    recorded: list[dict] = []

    def fake_request(method, url, timeout=None, **kwargs):
        recorded.append({"method": method, "url": url, **kwargs})
        return FakeResponse({"ok": True})

    for name in ("DOCV_HOST", "DOCV_USER", "DOCV_ROLE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli.requests, "request", fake_request)
    return recorded


def test_search_sends_identity_and_payload(calls: list[dict]) -> None:
    result = runner.invoke(
        cli.app,
        ["search", "budget", "--mode", "keyword", "--user", "bob", "--role", "finance", "--host", "http://vault:9000/"],
    )
    assert result.exit_code == 0
    call = calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://vault:9000/search"
    assert call["headers"] == {"X-User": "bob", "X-Role": "finance"}
    assert call["json"] == {"query": "budget", "mode": "keyword"}


def test_identity_from_environment(calls: list[dict], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCV_HOST", "http://env-host:8001")
    monkeypatch.setenv("DOCV_USER", "erin")
    monkeypatch.setenv("DOCV_ROLE", "hr")
    result = runner.invoke(cli.app, ["stats"])
    assert result.exit_code == 0
    assert calls[0]["url"] == "http://env-host:8001/stats"
    assert calls[0]["headers"]["X-Role"] == "hr"


def test_missing_identity_exits(calls: list[dict]) -> None:
    result = runner.invoke(cli.app, ["recent"])
    assert result.exit_code == 2
    assert calls == []


def test_ingest_uploads_file(calls: list[dict], tmp_path: Path) -> None:
    note = tmp_path / "policy.md"
    note.write_text("# Policy\n\nBody")
    result = runner.invoke(
        cli.app,
        ["ingest", str(note), "--category", "HR", "--user", "alice", "--role", "admin"],
    )
    assert result.exit_code == 0
    call = calls[0]
    assert call["url"] == "http://127.0.0.1:8000/documents/upload"
    assert call["params"] == {"file_name": "policy.md", "category": "HR"}
    assert call["data"] == b"# Policy\n\nBody"
    assert call["headers"]["Content-Type"] == "text/markdown"


def test_failed_request_exits_nonzero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli.requests,
        "request",
        lambda method, url, timeout=None, **kwargs: FakeResponse({"detail": "forbidden"}, status_code=403),
    )
    result = runner.invoke(cli.app, ["delete", "doc_1", "--user", "fred", "--role", "finance"])
    assert result.exit_code == 1
