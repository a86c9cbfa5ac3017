"""Common ingestion data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from doc_vault.models.entities import Document, FileInfo, Uploader, UserDetails


@dataclass(slots=True)
class LoadedUpload:
    """Plain text decoded from an uploaded file."""

    text: str
    mime: str
    size_bytes: int
    front_matter: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class IngestRequest:
    """Everything ``analyze`` needs for one document."""

    content: str
    file_info: FileInfo
    uploader: Uploader
    details: UserDetails | None = None


@dataclass(slots=True)
class IngestOutcome:
    """Result of ingesting one document.

    ``document`` is always the fully analysed record, even when the store
    rejected it; ``persisted`` and ``error`` say whether the save landed.
    """

    document: Document
    persisted: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document.to_dict(),
            "persisted": self.persisted,
            "error": self.error,
        }


__all__ = ["LoadedUpload", "IngestRequest", "IngestOutcome"]
