"""Document vector lookup with a lazily filled cache."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from doc_vault.core.logging import log_context
from doc_vault.core.metrics import EMBEDDING_CACHE
from doc_vault.ingest.embeddings import EmbeddingModel, embedding_text
from doc_vault.models.entities import Document
from doc_vault.utils.hashing import sha256_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Entry:
    digest: str
    vector: tuple[float, ...]


class VectorIndex:
    """Resolve the vector a document is scored with.

    A document's own embedding is used when it has the model's dimension.
    Otherwise (a record stored without one, or a corrupted vector) the vector
    is computed on first access and cached under the document id together
    with a hash of the embedded text, so a re-ingest under the same id
    invalidates it.
    """

    def __init__(self, model: EmbeddingModel) -> None:
        self.model = model
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    @property
    def dim(self) -> int:
        return self.model.dim

    @property
    def size(self) -> int:
        return len(self._entries)

    def vector_for(self, document: Document) -> tuple[float, ...]:
        if len(document.embedding) == self.dim:
            return document.embedding
        if document.embedding:
            logger.warning(
                "Stored embedding for %s has %s components, recomputing",
                document.id,
                len(document.embedding),
                extra=log_context(document_id=document.id),
            )
        text = embedding_text(document.title, document.content, document.summary)
        digest = sha256_text(text)
        with self._lock:
            entry = self._entries.get(document.id)
        if entry is not None and entry.digest == digest:
            EMBEDDING_CACHE.labels(result="hit").inc()
            return entry.vector
        EMBEDDING_CACHE.labels(result="miss").inc()
        vector = self.model.embed(text)
        with self._lock:
            self._entries[document.id] = _Entry(digest=digest, vector=vector)
        return vector

    def prime(self, document: Document) -> None:
        """Record a freshly ingested document's vector, replacing any stale entry."""
        if len(document.embedding) != self.dim:
            self.invalidate(document.id)
            return
        digest = sha256_text(embedding_text(document.title, document.content, document.summary))
        with self._lock:
            self._entries[document.id] = _Entry(digest=digest, vector=document.embedding)

    def invalidate(self, document_id: str) -> None:
        with self._lock:
            self._entries.pop(document_id, None)

    def warm(self, documents: Sequence[Document], max_workers: int = 4) -> int:
        """Fill the cache for a corpus; documents are independent so this fans out."""
        if not documents:
            return 0
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            vectors = list(pool.map(self.vector_for, documents))
        return len(vectors)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


__all__ = ["VectorIndex"]
