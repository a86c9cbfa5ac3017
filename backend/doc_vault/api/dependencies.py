"""Shared FastAPI dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Header, HTTPException

from doc_vault.core.config import Settings, get_settings
from doc_vault.db.sqlite import SQLiteDatabase
from doc_vault.db.store import DocumentStore
from doc_vault.ingest.embeddings import EmbeddingModel
from doc_vault.ingest.pipeline import IngestPipeline
from doc_vault.models.entities import Uploader
from doc_vault.models.taxonomy import Role
from doc_vault.retrieval import SearchService, VectorIndex

_DB: SQLiteDatabase | None = None
_STORE: DocumentStore | None = None
_VECTOR_INDEX: VectorIndex | None = None
_PIPELINE: IngestPipeline | None = None
_SEARCH_SERVICE: SearchService | None = None


@dataclass(slots=True, frozen=True)
class Identity:
    """Caller identity as asserted by the fronting auth layer."""

    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return Role.lookup(self.role) is Role.ADMIN

    def as_uploader(self) -> Uploader:
        return Uploader(username=self.username, role=self.role)


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_database() -> SQLiteDatabase:
    global _DB
    if _DB is None:
        _DB = SQLiteDatabase(get_app_settings().db_path)
    return _DB


def get_embedding_model() -> EmbeddingModel:
    return EmbeddingModel.get(get_app_settings().embedding_model)


def get_document_store() -> DocumentStore:
    global _STORE
    if _STORE is None:
        store = DocumentStore(get_database(), get_embedding_model())
        store.ensure_schema()
        _STORE = store
    return _STORE


def get_vector_index() -> VectorIndex:
    global _VECTOR_INDEX
    if _VECTOR_INDEX is None:
        _VECTOR_INDEX = VectorIndex(get_embedding_model())
    return _VECTOR_INDEX


def get_ingest_pipeline() -> IngestPipeline:
    global _PIPELINE
    if _PIPELINE is None:
        _PIPELINE = IngestPipeline(
            store=get_document_store(),
            settings=get_app_settings(),
            embedding_model=get_embedding_model(),
            vector_index=get_vector_index(),
        )
    return _PIPELINE


def get_search_service() -> SearchService:
    global _SEARCH_SERVICE
    if _SEARCH_SERVICE is None:
        _SEARCH_SERVICE = SearchService(
            settings=get_app_settings(),
            embedding_model=get_embedding_model(),
            vector_index=get_vector_index(),
        )
    return _SEARCH_SERVICE


def get_identity(
    x_user: str | None = Header(default=None),
    x_role: str | None = Header(default=None),
) -> Identity:
    """Read the caller from ``X-User``/``X-Role``. Unknown roles pass and see nothing."""
    if not x_user or not x_role:
        raise HTTPException(status_code=401, detail="X-User and X-Role headers are required")
    return Identity(username=x_user, role=x_role)


__all__ = [
    "Identity",
    "get_app_settings",
    "get_database",
    "get_document_store",
    "get_embedding_model",
    "get_vector_index",
    "get_ingest_pipeline",
    "get_search_service",
    "get_identity",
]
