"""Semantic and keyword search over role-visible documents."""

from __future__ import annotations

import time
from typing import Sequence

from doc_vault.core.config import Settings
from doc_vault.core.logging import get_logger, log_context
from doc_vault.core.metrics import SEARCH_COUNT, SEARCH_LATENCY
from doc_vault.ingest.embeddings import EmbeddingModel, similarity
from doc_vault.models.entities import Document, SearchResult
from doc_vault.models.taxonomy import Category, Role
from doc_vault.retrieval.access import visible_documents
from doc_vault.retrieval.vector_index import VectorIndex

logger = get_logger(__name__)

# Semantic matches at or below this cosine similarity are dropped.
SIMILARITY_FLOOR = 0.1
SNIPPET_LEAD = 50
SNIPPET_WIDTH = 200

SORT_KEYS = ("date", "title", "category")

RoleLike = str | Role | None


class SearchService:
    """Ranking, snippets and listings, always over the caller's visible set."""

    def __init__(
        self,
        settings: Settings,
        embedding_model: EmbeddingModel,
        vector_index: VectorIndex | None = None,
    ) -> None:
        self.settings = settings
        self.embedding_model = embedding_model
        self.vector_index = vector_index or VectorIndex(embedding_model)

    def semantic_search(
        self,
        query: str,
        role: RoleLike,
        documents: Sequence[Document],
        limit: int | None = None,
        category: str | Category | None = None,
    ) -> list[SearchResult]:
        start_time = time.perf_counter()
        top_k = limit if limit is not None else self.settings.default_limit
        visible = visible_documents(role, documents)
        query_vector = self.embedding_model.embed(query)

        scored: list[tuple[float, Document]] = []
        for document in visible:
            score = similarity(query_vector, self.vector_index.vector_for(document))
            if score > SIMILARITY_FLOOR:
                scored.append((score, document))
        # list.sort is stable: equal scores keep visible-list order.
        scored.sort(key=lambda item: item[0], reverse=True)

        results = [
            SearchResult(document=document, score=score, snippet=semantic_snippet(document.content, query))
            for score, document in scored[: max(top_k, 0)]
        ]
        results = _filter_category(results, category)
        self._record("semantic", start_time, len(visible), len(results))
        return results

    def keyword_search(
        self,
        query: str,
        role: RoleLike,
        documents: Sequence[Document],
        category: str | Category | None = None,
    ) -> list[SearchResult]:
        start_time = time.perf_counter()
        visible = visible_documents(role, documents)
        tokens = query.lower().split()

        scored: list[tuple[int, Document, str]] = []
        for document in visible:
            haystack = searchable_text(document)
            score = sum(haystack.count(token) for token in tokens)
            if score <= 0:
                continue
            scored.append((score, document, keyword_snippet(document, tokens, haystack)))
        scored.sort(key=lambda item: item[0], reverse=True)

        results = [
            SearchResult(document=document, score=float(score), snippet=snippet)
            for score, document, snippet in scored
        ]
        results = _filter_category(results, category)
        self._record("keyword", start_time, len(visible), len(results))
        return results

    def get_document(self, document_id: str, role: RoleLike, documents: Sequence[Document]) -> Document | None:
        for document in visible_documents(role, documents):
            if document.id == document_id:
                return document
        return None

    def recent_documents(
        self,
        role: RoleLike,
        documents: Sequence[Document],
        limit: int | None = None,
    ) -> list[Document]:
        count = limit if limit is not None else self.settings.recent_limit
        ordered = sorted(visible_documents(role, documents), key=lambda doc: doc.upload_date, reverse=True)
        return ordered[: max(count, 0)]

    def list_documents(
        self,
        role: RoleLike,
        documents: Sequence[Document],
        category: str | Category | None = None,
        sort_by: str = "date",
    ) -> list[Document]:
        if sort_by not in SORT_KEYS:
            raise ValueError(f"sort_by must be one of {', '.join(SORT_KEYS)}")
        visible = visible_documents(role, documents)
        if category is not None:
            wanted = Category.parse(category)
            visible = [doc for doc in visible if doc.category is wanted]
        if sort_by == "date":
            return sorted(visible, key=lambda doc: doc.upload_date, reverse=True)
        if sort_by == "title":
            return sorted(visible, key=lambda doc: doc.title.lower())
        return sorted(visible, key=lambda doc: doc.category.value)

    def category_stats(self, role: RoleLike, documents: Sequence[Document]) -> dict[str, int]:
        stats: dict[str, int] = {}
        for document in visible_documents(role, documents):
            key = document.category.value
            stats[key] = stats.get(key, 0) + 1
        return stats

    def _record(self, mode: str, start_time: float, candidates: int, returned: int) -> None:
        duration = time.perf_counter() - start_time
        SEARCH_LATENCY.labels(mode=mode).observe(duration)
        SEARCH_COUNT.labels(mode=mode).inc()
        logger.debug(
            "%s search scored %s documents, returned %s",
            mode,
            candidates,
            returned,
            extra=log_context(mode=mode, duration_s=round(duration, 6)),
        )


def searchable_text(document: Document) -> str:
    parts = (document.title, document.content, document.summary, " ".join(document.metadata.keywords))
    return " ".join(parts).lower()


def content_window(content: str, start: int) -> str:
    return content[start : start + SNIPPET_WIDTH] + "..."


def semantic_snippet(content: str, query: str) -> str:
    """Window around the first query word found in the content, else the opening."""
    lowered = content.lower()
    for word in query.lower().split():
        index = lowered.find(word)
        if index != -1:
            return content_window(content, max(0, index - SNIPPET_LEAD))
    return content_window(content, 0)


def keyword_snippet(document: Document, tokens: Sequence[str], haystack: str) -> str:
    """Content window around the first matching token; the summary otherwise."""
    first_match = next((token for token in tokens if token in haystack), None)
    if first_match is None:
        return document.summary
    index = document.content.lower().find(first_match)
    if index == -1:
        return document.summary
    return content_window(document.content, max(0, index - SNIPPET_LEAD))


def _filter_category(results: list[SearchResult], category: str | Category | None) -> list[SearchResult]:
    if category is None:
        return results
    wanted = Category.parse(category)
    return [result for result in results if result.document.category is wanted]


__all__ = [
    "SIMILARITY_FLOOR",
    "SearchService",
    "searchable_text",
    "semantic_snippet",
    "keyword_snippet",
]
