"""Document ingest and listing routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from doc_vault.api.dependencies import (
    Identity,
    get_document_store,
    get_identity,
    get_ingest_pipeline,
    get_search_service,
    get_vector_index,
)
from doc_vault.db.store import DocumentStore
from doc_vault.ingest.loaders import UnsupportedUploadError
from doc_vault.ingest.pipeline import IngestPipeline
from doc_vault.models.dto import (
    DeleteResponse,
    DocumentIngestRequest,
    DocumentResponse,
    IngestResponse,
)
from doc_vault.models.entities import FileInfo, UserDetails
from doc_vault.retrieval import SearchService, VectorIndex

router = APIRouter()


@router.post("", response_model=IngestResponse, status_code=201, summary="Ingest extracted document text")
async def ingest_document(
    request: DocumentIngestRequest,
    response: Response,
    identity: Identity = Depends(get_identity),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
) -> IngestResponse:
    file_size = request.file_size if request.file_size is not None else len(request.content.encode("utf-8"))
    file_info = FileInfo(file_name=request.file_name, file_size=file_size, file_type=request.file_type)
    details = request.details.to_details() if request.details else None
    try:
        outcome = pipeline.ingest(request.content, file_info, identity.as_uploader(), details)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if not outcome.persisted:
        response.status_code = 202
    return IngestResponse.from_outcome(outcome)


@router.post("/upload", response_model=IngestResponse, status_code=201, summary="Upload a text or Markdown file")
async def upload_document(
    request: Request,
    response: Response,
    file_name: str = Query(..., min_length=1),
    title: str | None = Query(default=None),
    author: str | None = Query(default=None),
    category: str | None = Query(default=None),
    date: str | None = Query(default=None),
    identity: Identity = Depends(get_identity),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
) -> IngestResponse:
    raw = await request.body()
    details = None
    if any(value is not None for value in (title, author, category, date)):
        details = UserDetails(title=title, author=author, category=category, date=date)
    try:
        outcome = pipeline.ingest_upload(
            raw,
            file_name,
            request.headers.get("content-type"),
            identity.as_uploader(),
            details,
        )
    except UnsupportedUploadError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    if not outcome.persisted:
        response.status_code = 202
    return IngestResponse.from_outcome(outcome)


@router.post("/{document_id}/persist", response_model=IngestResponse, summary="Retry saving a pending document")
async def retry_persist(
    document_id: str,
    response: Response,
    identity: Identity = Depends(get_identity),
    pipeline: IngestPipeline = Depends(get_ingest_pipeline),
) -> IngestResponse:
    document = pipeline.pending_document(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="No pending document with that id")
    if not identity.is_admin and document.uploader != identity.username:
        raise HTTPException(status_code=403, detail="Only the uploader or an administrator can retry this save")
    try:
        outcome = pipeline.retry_persist(document_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="No pending document with that id") from exc
    if not outcome.persisted:
        response.status_code = 202
    return IngestResponse.from_outcome(outcome)


@router.get("", response_model=list[DocumentResponse], summary="List documents visible to the caller")
async def list_documents(
    category: str | None = Query(default=None),
    sort: str = Query(default="date"),
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store),
    service: SearchService = Depends(get_search_service),
) -> list[DocumentResponse]:
    try:
        documents = service.list_documents(identity.role, store.list_documents(), category=category, sort_by=sort)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return [DocumentResponse.from_document(document) for document in documents]


@router.get("/recent", response_model=list[DocumentResponse], summary="Most recently uploaded documents")
async def recent_documents(
    limit: int | None = Query(default=None, ge=1, le=100),
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store),
    service: SearchService = Depends(get_search_service),
) -> list[DocumentResponse]:
    documents = service.recent_documents(identity.role, store.list_documents(), limit=limit)
    return [DocumentResponse.from_document(document) for document in documents]


@router.get("/{document_id}", response_model=DocumentResponse, summary="Fetch one visible document")
async def get_document(
    document_id: str,
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store),
    service: SearchService = Depends(get_search_service),
) -> DocumentResponse:
    stored = store.get_document(document_id)
    document = service.get_document(document_id, identity.role, [stored] if stored else [])
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return DocumentResponse.from_document(document)


@router.delete("/{document_id}", response_model=DeleteResponse, summary="Soft-delete a document")
async def delete_document(
    document_id: str,
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_document_store),
    vector_index: VectorIndex = Depends(get_vector_index),
) -> DeleteResponse:
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Only administrators can delete documents")
    deleted = store.soft_delete(document_id)
    if deleted:
        vector_index.invalidate(document_id)
    return DeleteResponse(status="ok" if deleted else "noop", deleted=int(deleted))


__all__ = ["router"]
