"""Search API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from doc_vault.api.dependencies import Identity, get_document_store, get_identity, get_search_service
from doc_vault.db.store import DocumentStore
from doc_vault.models.dto import SearchHit, SearchRequest, SearchResponse
from doc_vault.retrieval import SearchService

router = APIRouter()


@router.post("/search", response_model=SearchResponse, summary="Semantic or keyword search")
async def run_search(
    request: SearchRequest,
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store),
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    documents = store.list_documents()
    try:
        if request.mode == "keyword":
            results = service.keyword_search(request.query, identity.role, documents, category=request.category)
        else:
            results = service.semantic_search(
                request.query,
                identity.role,
                documents,
                limit=request.limit,
                category=request.category,
            )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return SearchResponse(mode=request.mode, results=[SearchHit.from_result(result) for result in results])


__all__ = ["router"]
