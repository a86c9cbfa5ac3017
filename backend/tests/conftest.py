"""Test fixtures for Doc Vault."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


def _reset_singletons() -> None:
    from doc_vault.api import dependencies as deps
    from doc_vault.core.config import get_settings
    from doc_vault.ingest.embeddings import EmbeddingModel

    EmbeddingModel._instances.clear()
    get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    if deps._DB is not None:
        deps._DB.close()
    deps._DB = None
    deps._STORE = None
    deps._VECTOR_INDEX = None
    deps._PIPELINE = None
    deps._SEARCH_SERVICE = None


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("DOCV_DB_PATH", str(tmp_path / "vault.db"))
    monkeypatch.delenv("DOCV_CONFIG", raising=False)
    _reset_singletons()
    yield
    _reset_singletons()


@pytest.fixture
def settings(tmp_path: Path):
    from doc_vault.core.config import Settings

    return Settings(db_path=tmp_path / "vault.db")


@pytest.fixture
def store(settings):
    from doc_vault.db.sqlite import SQLiteDatabase
    from doc_vault.db.store import DocumentStore
    from doc_vault.ingest.embeddings import EmbeddingModel

    db = SQLiteDatabase(settings.db_path)
    document_store = DocumentStore(db, EmbeddingModel.get(settings.embedding_model))
    document_store.ensure_schema()
    yield document_store
    db.close()


@pytest.fixture
def pipeline(store, settings):
    from doc_vault.ingest.pipeline import IngestPipeline

    return IngestPipeline(store=store, settings=settings)


@pytest.fixture
def search_service(settings):
    from doc_vault.ingest.embeddings import EmbeddingModel
    from doc_vault.retrieval import SearchService

    return SearchService(settings=settings, embedding_model=EmbeddingModel.get(settings.embedding_model))


@pytest.fixture
def uploader():
    from doc_vault.models.entities import Uploader

    return Uploader(username="alice", role="admin")


@pytest.fixture(scope="session")
def invoice_text() -> str:
    return "Invoice from Acme Corp for $500 due 01/15/2024"


@pytest.fixture
def make_document():
    """Build a document directly, bypassing analysis."""
    from doc_vault.models.entities import Document, DocumentMetadata
    from doc_vault.models.taxonomy import Category

    def _make(
        doc_id: str = "doc_1",
        content: str = "",
        title: str = "Untitled",
        category: Category = Category.OTHER,
        summary: str = "",
        upload_date: str = "2024-01-01",
        keywords: tuple[str, ...] = (),
        embedding: tuple[float, ...] = (),
        is_active: bool = True,
    ) -> Document:
        return Document(
            id=doc_id,
            title=title,
            author="Unknown",
            category=category,
            suggested_category=category,
            upload_date=upload_date,
            uploader="alice",
            file_name=f"{doc_id}.txt",
            file_size=len(content),
            file_type="text/plain",
            content=content,
            summary=summary,
            metadata=DocumentMetadata(title=title, author="Unknown", keywords=keywords),
            embedding=embedding,
            is_active=is_active,
        )

    return _make
