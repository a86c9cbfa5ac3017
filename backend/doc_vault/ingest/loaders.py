"""Decoders that turn uploaded bytes into plain text."""

from __future__ import annotations

from pathlib import PurePath
from typing import Any

import yaml
from markdown_it import MarkdownIt

from doc_vault.ingest.types import LoadedUpload

_MD = MarkdownIt()


class UnsupportedUploadError(ValueError):
    """Raised for uploads no decoder accepts (binary formats are not parsed)."""


class BaseLoader:
    """Common loader interface."""

    suffixes: tuple[str, ...] = ()
    mime_types: tuple[str, ...] = ()

    def can_load(self, file_name: str, mime: str | None) -> bool:
        if mime and mime.split(";")[0].strip().lower() in self.mime_types:
            return True
        return PurePath(file_name).suffix.lower() in self.suffixes

    def load(self, raw: bytes) -> LoadedUpload:  # pragma: no cover - interface
        raise NotImplementedError


class MarkdownLoader(BaseLoader):
    suffixes = (".md", ".markdown", ".mdx")
    mime_types = ("text/markdown", "text/x-markdown")

    def load(self, raw: bytes) -> LoadedUpload:
        text = raw.decode("utf-8", errors="ignore")
        front_matter, body = _split_front_matter(text)
        return LoadedUpload(
            text=_markdown_to_text(body),
            mime=self.mime_types[0],
            size_bytes=len(raw),
            front_matter=front_matter or {},
        )


class TextLoader(BaseLoader):
    suffixes = (".txt", ".text", ".log", ".csv")
    mime_types = ("text/plain", "text/csv")

    def load(self, raw: bytes) -> LoadedUpload:
        return LoadedUpload(
            text=raw.decode("utf-8", errors="ignore"),
            mime=self.mime_types[0],
            size_bytes=len(raw),
        )


class LoaderRegistry:
    """Registry that selects a decoder by MIME type, then by file suffix."""

    def __init__(self) -> None:
        self._loaders: list[BaseLoader] = [MarkdownLoader(), TextLoader()]

    def for_upload(self, file_name: str, mime: str | None) -> BaseLoader | None:
        for loader in self._loaders:
            if loader.can_load(file_name, mime):
                return loader
        return None

    def load(self, raw: bytes, file_name: str, mime: str | None = None) -> LoadedUpload:
        loader = self.for_upload(file_name, mime)
        if loader is None:
            raise UnsupportedUploadError(f"Cannot decode {file_name!r} ({mime or 'unknown type'})")
        return loader.load(raw)


def _split_front_matter(text: str) -> tuple[dict[str, Any] | None, str]:
    if text.startswith("---"):
        parts = text.split("---", 2)
        if len(parts) >= 3:
            try:
                front_matter = yaml.safe_load(parts[1]) or {}
            except yaml.YAMLError:
                return None, text
            if isinstance(front_matter, dict):
                return front_matter, parts[2]
    return None, text


def _markdown_to_text(text: str) -> str:
    # One line per block so the first heading still reads as the title line.
    parts = [token.content.strip() for token in _MD.parse(text) if token.content.strip()]
    return "\n".join(parts) if parts else text


__all__ = ["UnsupportedUploadError", "BaseLoader", "MarkdownLoader", "TextLoader", "LoaderRegistry"]
