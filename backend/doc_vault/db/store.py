"""SQLite-backed document store."""

from __future__ import annotations

import sqlite3
from typing import Protocol

import orjson

from doc_vault.core.logging import get_logger, log_context
from doc_vault.core.metrics import DOCUMENT_GAUGE
from doc_vault.db.sqlite import SQLiteDatabase
from doc_vault.ingest.embeddings import EmbeddingModel
from doc_vault.models.entities import Document, DocumentMetadata
from doc_vault.models.taxonomy import Category
from doc_vault.utils.time import now_ms

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS documents (
  id TEXT PRIMARY KEY,
  title TEXT NOT NULL,
  author TEXT NOT NULL,
  category TEXT NOT NULL,
  suggested_category TEXT NOT NULL,
  upload_date TEXT NOT NULL,
  uploader TEXT NOT NULL,
  file_name TEXT NOT NULL,
  file_size INTEGER NOT NULL,
  file_type TEXT NOT NULL,
  content TEXT NOT NULL,
  summary TEXT NOT NULL,
  meta_json TEXT NOT NULL,
  embedding BLOB,
  embedding_model TEXT,
  is_deleted INTEGER NOT NULL DEFAULT 0,
  created_at INTEGER NOT NULL,
  updated_at INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_documents_category ON documents (category);
"""

_COLUMNS = (
    "id, title, author, category, suggested_category, upload_date, uploader, file_name, "
    "file_size, file_type, content, summary, meta_json, embedding, is_deleted"
)


class DocumentSink(Protocol):
    """What the ingest pipeline needs from persistence."""

    def save_document(self, document: Document) -> None: ...


class DocumentStore:
    """Persists documents; deletion is soft and produces an inactive record."""

    def __init__(self, db: SQLiteDatabase, embedding_model: EmbeddingModel) -> None:
        self.db = db
        self.embedding_model = embedding_model

    def ensure_schema(self) -> None:
        self.db.ensure_schema(SCHEMA_SQL)

    def save_document(self, document: Document) -> None:
        now = now_ms()
        with self.db.transaction() as conn:
            conn.execute(
                """
                INSERT INTO documents (
                  id, title, author, category, suggested_category, upload_date, uploader,
                  file_name, file_size, file_type, content, summary, meta_json,
                  embedding, embedding_model, is_deleted, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    document.id,
                    document.title,
                    document.author,
                    document.category.value,
                    document.suggested_category.value,
                    document.upload_date,
                    document.uploader,
                    document.file_name,
                    document.file_size,
                    document.file_type,
                    document.content,
                    document.summary,
                    orjson.dumps(document.metadata.to_dict()).decode("utf-8"),
                    self.embedding_model.as_bytes(document.embedding),
                    self.embedding_model.model_name,
                    0 if document.is_active else 1,
                    now,
                    now,
                ],
            )
        self._refresh_gauge()

    def get_document(self, document_id: str) -> Document | None:
        rows = self.db.query(
            f"SELECT {_COLUMNS} FROM documents WHERE id = ? AND is_deleted = 0",
            [document_id],
        )
        return self._row_to_document(rows[0]) if rows else None

    def list_documents(self, include_inactive: bool = False) -> list[Document]:
        """Documents in insertion order, which is the order search ties keep."""
        where = "" if include_inactive else " WHERE is_deleted = 0"
        rows = self.db.query(f"SELECT {_COLUMNS} FROM documents{where} ORDER BY rowid ASC", [])
        return [self._row_to_document(row) for row in rows]

    def soft_delete(self, document_id: str) -> bool:
        with self.db.transaction() as conn:
            cursor = conn.execute(
                "UPDATE documents SET is_deleted = 1, updated_at = ? WHERE id = ? AND is_deleted = 0",
                [now_ms(), document_id],
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Soft-deleted document %s", document_id, extra=log_context(document_id=document_id))
            self._refresh_gauge()
        return deleted

    def count_by_category(self) -> dict[str, int]:
        rows = self.db.query(
            "SELECT category, COUNT(*) AS count FROM documents WHERE is_deleted = 0 "
            "GROUP BY category ORDER BY category",
            [],
        )
        return {row["category"]: int(row["count"]) for row in rows}

    def _row_to_document(self, row: sqlite3.Row) -> Document:
        return Document(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            category=Category.parse(row["category"]),
            suggested_category=Category.parse(row["suggested_category"]),
            upload_date=row["upload_date"],
            uploader=row["uploader"],
            file_name=row["file_name"],
            file_size=int(row["file_size"]),
            file_type=row["file_type"],
            content=row["content"],
            summary=row["summary"],
            metadata=DocumentMetadata.from_dict(orjson.loads(row["meta_json"])),
            embedding=self.embedding_model.from_bytes(row["embedding"]),
            is_active=not row["is_deleted"],
        )

    def _refresh_gauge(self) -> None:
        rows = self.db.query("SELECT COUNT(*) AS count FROM documents WHERE is_deleted = 0", [])
        DOCUMENT_GAUGE.set(int(rows[0]["count"]) if rows else 0)


__all__ = ["SCHEMA_SQL", "DocumentSink", "DocumentStore"]
