"""Role based document visibility."""

from __future__ import annotations

import logging
from typing import Iterable

from doc_vault.core.logging import log_context
from doc_vault.models.entities import Document
from doc_vault.models.taxonomy import ROLE_CATEGORIES, Category, Role

logger = logging.getLogger(__name__)


def allowed_categories(role: str | Role | None) -> frozenset[Category] | None:
    """Categories a role may read; ``None`` means unrestricted (admin)."""
    resolved = Role.lookup(role)
    if resolved is Role.ADMIN:
        return None
    if resolved is None or resolved not in ROLE_CATEGORIES:
        logger.warning("Unmapped role %r sees no documents", role, extra=log_context(role=str(role)))
        return frozenset()
    return ROLE_CATEGORIES[resolved]


def can_view(role: str | Role | None, document: Document) -> bool:
    if not document.is_active:
        return False
    allowed = allowed_categories(role)
    return allowed is None or document.category in allowed


def visible_documents(role: str | Role | None, documents: Iterable[Document]) -> list[Document]:
    """Active documents the role may see, in their original order."""
    allowed = allowed_categories(role)
    active = (document for document in documents if document.is_active)
    if allowed is None:
        return list(active)
    return [document for document in active if document.category in allowed]


__all__ = ["allowed_categories", "can_view", "visible_documents"]
