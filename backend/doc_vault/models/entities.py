"""Internal dataclasses for documents and their derived records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from doc_vault.models.taxonomy import Category


@dataclass(slots=True, frozen=True)
class EntitySet:
    people: tuple[str, ...] = ()
    organizations: tuple[str, ...] = ()
    amounts: tuple[str, ...] = ()
    dates: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "people": list(self.people),
            "organizations": list(self.organizations),
            "amounts": list(self.amounts),
            "dates": list(self.dates),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "EntitySet":
        data = data or {}
        return cls(
            people=tuple(data.get("people") or ()),
            organizations=tuple(data.get("organizations") or ()),
            amounts=tuple(data.get("amounts") or ()),
            dates=tuple(data.get("dates") or ()),
        )


@dataclass(slots=True, frozen=True)
class DocumentMetadata:
    title: str
    author: str
    date: str | None = None
    entities: EntitySet = field(default_factory=EntitySet)
    keywords: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "date": self.date,
            "entities": self.entities.to_dict(),
            "keywords": list(self.keywords),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentMetadata":
        return cls(
            title=data.get("title") or "",
            author=data.get("author") or "Unknown",
            date=data.get("date"),
            entities=EntitySet.from_dict(data.get("entities")),
            keywords=tuple(data.get("keywords") or ()),
        )


@dataclass(slots=True, frozen=True)
class Uploader:
    username: str
    role: str


@dataclass(slots=True, frozen=True)
class FileInfo:
    file_name: str
    file_size: int
    file_type: str


@dataclass(slots=True, frozen=True)
class UserDetails:
    """Fields a user may type in on upload; ``None`` means "use the inferred value"."""

    title: str | None = None
    author: str | None = None
    category: str | None = None
    date: str | None = None


@dataclass(slots=True, frozen=True)
class Document:
    """A stored document. Never mutated; re-ingest produces a new record."""

    id: str
    title: str
    author: str
    category: Category
    suggested_category: Category
    upload_date: str
    uploader: str
    file_name: str
    file_size: int
    file_type: str
    content: str
    summary: str
    metadata: DocumentMetadata
    embedding: tuple[float, ...]
    is_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Plain fields for the API layer; the embedding is never serialised."""
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "category": self.category.value,
            "suggested_category": self.suggested_category.value,
            "upload_date": self.upload_date,
            "uploader": self.uploader,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "file_type": self.file_type,
            "content": self.content,
            "summary": self.summary,
            "metadata": self.metadata.to_dict(),
            "is_active": self.is_active,
        }


@dataclass(slots=True, frozen=True)
class SearchResult:
    document: Document
    score: float
    snippet: str


__all__ = [
    "EntitySet",
    "DocumentMetadata",
    "Uploader",
    "FileInfo",
    "UserDetails",
    "Document",
    "SearchResult",
]
