"""Statistics and operational routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from doc_vault.api.dependencies import Identity, get_document_store, get_identity, get_search_service
from doc_vault.core.metrics import metrics_response
from doc_vault.db.store import DocumentStore
from doc_vault.models.dto import StatsResponse
from doc_vault.retrieval import SearchService

router = APIRouter()


@router.get("/stats", response_model=StatsResponse, summary="Document counts per category for the caller")
async def category_stats(
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store),
    service: SearchService = Depends(get_search_service),
) -> StatsResponse:
    stats = service.category_stats(identity.role, store.list_documents())
    return StatsResponse(role=identity.role, total=sum(stats.values()), by_category=stats)


@router.get("/metrics", summary="Prometheus metrics")
async def get_metrics():
    return metrics_response()


__all__ = ["router"]
