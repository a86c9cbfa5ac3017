"""Ingest pipeline orchestration."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Mapping, Sequence

from doc_vault.analysis.classifier import classify
from doc_vault.analysis.metadata import extract_metadata
from doc_vault.analysis.summarizer import summarize
from doc_vault.core.config import Settings
from doc_vault.core.logging import get_logger, log_context
from doc_vault.core.metrics import INGEST_COUNT, INGEST_DURATION, INGEST_FAILURES
from doc_vault.db.store import DocumentSink
from doc_vault.ingest.embeddings import EmbeddingModel, embedding_text
from doc_vault.ingest.loaders import LoaderRegistry
from doc_vault.ingest.types import IngestOutcome, IngestRequest
from doc_vault.models.entities import Document, FileInfo, Uploader, UserDetails
from doc_vault.models.taxonomy import Category
from doc_vault.retrieval.vector_index import VectorIndex
from doc_vault.utils.ids import new_document_id
from doc_vault.utils.time import today_iso

logger = get_logger(__name__)

_FRONT_MATTER_FIELDS = ("title", "author", "category", "date")


class IngestPipeline:
    """Coordinate analysis, embedding and persistence of uploaded documents."""

    def __init__(
        self,
        store: DocumentSink,
        settings: Settings,
        embedding_model: EmbeddingModel | None = None,
        vector_index: VectorIndex | None = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.loader_registry = LoaderRegistry()
        self.embedding_model = embedding_model or EmbeddingModel.get(settings.embedding_model)
        self.vector_index = vector_index
        self._pending: dict[str, Document] = {}
        self._lock = threading.Lock()

    def analyze(
        self,
        content: str,
        file_info: FileInfo,
        uploader: Uploader,
        details: UserDetails | None = None,
    ) -> Document:
        """Build the document record without touching the store."""
        start_time = time.perf_counter()
        details = details or UserDetails()
        # Validate the user's category before doing any work.
        chosen_category = Category.parse(details.category) if details.category else None

        extracted = extract_metadata(content, file_info.file_name)
        suggested = classify(content, file_info.file_name)
        summary = summarize(content)

        metadata = replace(
            extracted,
            title=details.title or extracted.title,
            author=details.author or extracted.author,
            date=details.date or extracted.date,
        )
        vector = self.embedding_model.embed(embedding_text(metadata.title, content, summary))

        document = Document(
            id=new_document_id(),
            title=metadata.title,
            author=metadata.author,
            category=chosen_category or suggested,
            suggested_category=suggested,
            upload_date=details.date or today_iso(),
            uploader=uploader.username,
            file_name=file_info.file_name,
            file_size=file_info.file_size,
            file_type=file_info.file_type,
            content=content,
            summary=summary,
            metadata=metadata,
            embedding=vector,
        )
        INGEST_DURATION.observe(time.perf_counter() - start_time)
        return document

    def ingest(
        self,
        content: str,
        file_info: FileInfo,
        uploader: Uploader,
        details: UserDetails | None = None,
    ) -> IngestOutcome:
        document = self.analyze(content, file_info, uploader, details)
        if self.vector_index is not None:
            self.vector_index.prime(document)
        return self._persist(document)

    def ingest_upload(
        self,
        raw: bytes,
        file_name: str,
        file_type: str | None,
        uploader: Uploader,
        details: UserDetails | None = None,
    ) -> IngestOutcome:
        """Decode an uploaded file, then ingest it. Front matter fills unset details."""
        loaded = self.loader_registry.load(raw, file_name, file_type)
        file_info = FileInfo(file_name=file_name, file_size=len(raw), file_type=file_type or loaded.mime)
        merged = _merge_front_matter(details, loaded.front_matter)
        return self.ingest(loaded.text, file_info, uploader, merged)

    def analyze_many(self, requests: Sequence[IngestRequest], max_workers: int | None = None) -> list[Document]:
        """Analyse independent documents concurrently; output follows input order."""
        if not requests:
            return []
        workers = max_workers or self.settings.ingest_workers
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(
                pool.map(
                    lambda request: self.analyze(
                        request.content, request.file_info, request.uploader, request.details
                    ),
                    requests,
                )
            )

    def retry_persist(self, document_id: str) -> IngestOutcome:
        """Save a document whose earlier save failed, reusing its analysis."""
        with self._lock:
            document = self._pending.get(document_id)
        if document is None:
            raise KeyError(document_id)
        return self._persist(document)

    def pending_document(self, document_id: str) -> Document | None:
        with self._lock:
            return self._pending.get(document_id)

    def pending(self) -> list[Document]:
        with self._lock:
            return list(self._pending.values())

    # Internal helpers -------------------------------------------------

    def _persist(self, document: Document) -> IngestOutcome:
        context = log_context(document_id=document.id, category=document.category.value)
        try:
            self.store.save_document(document)
        except Exception as exc:
            logger.exception("Failed to persist document %s: %s", document.id, exc, extra=context)
            INGEST_FAILURES.inc()
            INGEST_COUNT.labels(status="pending").inc()
            with self._lock:
                self._pending[document.id] = document
            return IngestOutcome(document=document, persisted=False, error=str(exc))

        with self._lock:
            self._pending.pop(document.id, None)
        INGEST_COUNT.labels(status="persisted").inc()
        logger.info("Ingested %s as %s", document.file_name, document.category.value, extra=context)
        return IngestOutcome(document=document, persisted=True)


def _merge_front_matter(details: UserDetails | None, front_matter: Mapping[str, Any]) -> UserDetails | None:
    values = {
        name: str(front_matter[name])
        for name in _FRONT_MATTER_FIELDS
        if front_matter.get(name) not in (None, "")
    }
    if details is None:
        return UserDetails(**values) if values else None
    overrides = {name: value for name, value in values.items() if getattr(details, name) is None}
    return replace(details, **overrides) if overrides else details


__all__ = ["IngestPipeline"]
