"""CLI entrypoint for Doc Vault."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

import requests
import typer

app = typer.Typer(name="docv", help="Doc Vault command-line interface")

DEFAULT_HOST = "http://127.0.0.1:8000"

_CONTENT_TYPES = {
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".txt": "text/plain",
    ".text": "text/plain",
}


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("DOCV_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _identity_headers(user: Optional[str], role: Optional[str]) -> dict[str, str]:
    username = user or os.environ.get("DOCV_USER")
    role_name = role or os.environ.get("DOCV_ROLE")
    if not username or not role_name:
        typer.echo("A user and role are required (--user/--role or DOCV_USER/DOCV_ROLE)", err=True)
        raise typer.Exit(code=2)
    return {"X-User": username, "X-Role": role_name}


def _request(
    method: str,
    path: str,
    host: Optional[str] = None,
    user: Optional[str] = None,
    role: Optional[str] = None,
    **kwargs,
) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    headers = {**kwargs.pop("headers", {}), **_identity_headers(user, role)}
    resp = requests.request(method, url, timeout=60, headers=headers, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


def _echo_json(resp: requests.Response) -> None:
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def ingest(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Text or Markdown file"),
    title: Optional[str] = typer.Option(None, "--title", help="Override the extracted title"),
    author: Optional[str] = typer.Option(None, "--author", help="Override the extracted author"),
    category: Optional[str] = typer.Option(None, "--category", help="Override the suggested category"),
    date: Optional[str] = typer.Option(None, "--date", help="Document date"),
    user: Optional[str] = typer.Option(None, "--user", help="Uploading user"),
    role: Optional[str] = typer.Option(None, "--role", help="Uploading user's role"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Upload a file and print the analysed document."""
    params: dict[str, str] = {"file_name": path.name}
    for name, value in (("title", title), ("author", author), ("category", category), ("date", date)):
        if value is not None:
            params[name] = value
    content_type = _CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")
    resp = _request(
        "POST",
        "/documents/upload",
        host=host,
        user=user,
        role=role,
        params=params,
        data=path.expanduser().read_bytes(),
        headers={"Content-Type": content_type},
    )
    _echo_json(resp)


@app.command()
def search(
    q: str = typer.Argument(..., help="Query text"),
    mode: str = typer.Option("semantic", "--mode", help="semantic or keyword"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Maximum semantic results"),
    category: Optional[str] = typer.Option(None, "--category", help="Only this category"),
    user: Optional[str] = typer.Option(None, "--user", help="Searching user"),
    role: Optional[str] = typer.Option(None, "--role", help="Searching user's role"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Search documents visible to the given role."""
    payload: dict[str, object] = {"query": q, "mode": mode}
    if limit is not None:
        payload["limit"] = limit
    if category is not None:
        payload["category"] = category
    resp = _request("POST", "/search", host=host, user=user, role=role, json=payload)
    _echo_json(resp)


@app.command()
def stats(
    user: Optional[str] = typer.Option(None, "--user", help="Requesting user"),
    role: Optional[str] = typer.Option(None, "--role", help="Requesting user's role"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Show per-category counts for the role."""
    resp = _request("GET", "/stats", host=host, user=user, role=role)
    _echo_json(resp)


@app.command()
def recent(
    limit: Optional[int] = typer.Option(None, "--limit", help="Number of documents"),
    user: Optional[str] = typer.Option(None, "--user", help="Requesting user"),
    role: Optional[str] = typer.Option(None, "--role", help="Requesting user's role"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """List the most recently uploaded documents."""
    params = {"limit": limit} if limit is not None else None
    resp = _request("GET", "/documents/recent", host=host, user=user, role=role, params=params)
    _echo_json(resp)


@app.command()
def delete(
    document_id: str = typer.Argument(..., help="Document identifier"),
    user: Optional[str] = typer.Option(None, "--user", help="Administrator user"),
    role: Optional[str] = typer.Option(None, "--role", help="Must be admin"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Soft-delete a document (admin only)."""
    resp = _request("DELETE", f"/documents/{document_id}", host=host, user=user, role=role)
    _echo_json(resp)


if __name__ == "__main__":
    app()
