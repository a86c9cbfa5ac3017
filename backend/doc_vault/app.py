"""FastAPI application setup for Doc Vault."""

from __future__ import annotations

from fastapi import FastAPI

from doc_vault.api.dependencies import (
    get_app_settings,
    get_document_store,
    get_ingest_pipeline,
    get_search_service,
    get_vector_index,
)
from doc_vault.api.routes_admin import router as admin_router
from doc_vault.api.routes_documents import router as documents_router
from doc_vault.api.routes_search import router as search_router
from doc_vault.core.logging import configure_logging

_settings = get_app_settings()
configure_logging(level=_settings.log_level, use_json=_settings.log_json)

app = FastAPI(
    title="Doc Vault",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(documents_router, prefix="/documents", tags=["documents"])
app.include_router(search_router, prefix="", tags=["search"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.on_event("startup")
async def startup() -> None:
    """Open the store, build the services and fill the vector cache."""
    store = get_document_store()
    get_ingest_pipeline()
    get_search_service()
    get_vector_index().warm(store.list_documents(), max_workers=get_app_settings().ingest_workers)


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
