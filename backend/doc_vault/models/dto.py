"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from doc_vault.ingest.types import IngestOutcome
from doc_vault.models.entities import Document, SearchResult, UserDetails


class DocumentDetails(BaseModel):
    title: str | None = None
    author: str | None = None
    category: str | None = None
    date: str | None = None

    def to_details(self) -> UserDetails:
        return UserDetails(title=self.title, author=self.author, category=self.category, date=self.date)


class DocumentIngestRequest(BaseModel):
    content: str
    file_name: str
    file_size: int | None = Field(default=None, ge=0, description="Defaults to the UTF-8 size of content")
    file_type: str = "text/plain"
    details: DocumentDetails | None = None


class EntitiesModel(BaseModel):
    people: list[str]
    organizations: list[str]
    amounts: list[str]
    dates: list[str]


class MetadataModel(BaseModel):
    title: str
    author: str
    date: str | None = None
    entities: EntitiesModel
    keywords: list[str]


class DocumentResponse(BaseModel):
    id: str
    title: str
    author: str
    category: str
    suggested_category: str
    upload_date: str
    uploader: str
    file_name: str
    file_size: int
    file_type: str
    content: str
    summary: str
    metadata: MetadataModel
    is_active: bool

    @classmethod
    def from_document(cls, document: Document) -> "DocumentResponse":
        return cls(**document.to_dict())


class IngestResponse(BaseModel):
    document: DocumentResponse
    persisted: bool
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: IngestOutcome) -> "IngestResponse":
        return cls(**outcome.to_dict())


class SearchRequest(BaseModel):
    query: str
    mode: Literal["semantic", "keyword"] = "semantic"
    category: str | None = None
    limit: int | None = Field(default=None, ge=1, le=100, description="Semantic mode only")


class SearchHit(BaseModel):
    document: DocumentResponse
    score: float
    snippet: str

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchHit":
        return cls(
            document=DocumentResponse.from_document(result.document),
            score=result.score,
            snippet=result.snippet,
        )


class SearchResponse(BaseModel):
    mode: Literal["semantic", "keyword"]
    results: list[SearchHit]


class StatsResponse(BaseModel):
    role: str
    total: int
    by_category: dict[str, int]


class DeleteResponse(BaseModel):
    status: Literal["ok", "noop"]
    deleted: int


__all__ = [
    "DocumentDetails",
    "DocumentIngestRequest",
    "IngestResponse",
    "DocumentResponse",
    "SearchRequest",
    "SearchHit",
    "SearchResponse",
    "StatsResponse",
    "DeleteResponse",
]
