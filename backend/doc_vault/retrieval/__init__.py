"""Retrieval components."""

from .access import can_view, visible_documents
from .search import SIMILARITY_FLOOR, SearchService
from .vector_index import VectorIndex

__all__ = [
    "VectorIndex",
    "SearchService",
    "SIMILARITY_FLOOR",
    "visible_documents",
    "can_view",
]
