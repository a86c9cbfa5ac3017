"""Heuristic metadata extraction: title, author, keywords and entities."""

from __future__ import annotations

import re

from doc_vault.analysis.text import extract_entities, word_frequency
from doc_vault.models.entities import DocumentMetadata

UNKNOWN_AUTHOR = "Unknown"
MAX_TITLE_LINE = 100
KEYWORD_LIMIT = 10
MIN_KEYWORD_CHARS = 4

STOP_WORDS = frozenset(
    {
        "this", "that", "with", "have", "will", "from", "they", "know", "want", "been",
        "good", "much", "some", "time", "very", "when", "come", "here", "just", "like",
        "long", "make", "many", "over", "such", "take", "than", "them", "well", "were",
    }
)

# Tried in order; group 1 is the author.
AUTHOR_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"Author:\s*(.+)", re.IGNORECASE),
    re.compile(r"By:\s*(.+)", re.IGNORECASE),
    re.compile(r"Created by:\s*(.+)", re.IGNORECASE),
    re.compile(r"([A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)+)"),
)

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def extract_metadata(content: str, file_name: str) -> DocumentMetadata:
    entities = extract_entities(content)
    return DocumentMetadata(
        title=extract_title(content, file_name),
        author=extract_author(content),
        date=entities.dates[0] if entities.dates else None,
        entities=entities,
        keywords=tuple(extract_keywords(content)),
    )


def extract_title(content: str, file_name: str) -> str:
    """First non-blank line when it is short enough, else the bare file name."""
    for line in content.split("\n"):
        if not line.strip():
            continue
        if len(line) < MAX_TITLE_LINE:
            return line.strip()
        break
    return strip_extension(file_name)


def extract_author(content: str) -> str:
    for pattern in AUTHOR_PATTERNS:
        match = pattern.search(content)
        if match:
            author = match.group(1).strip()
            if author:
                return author
    return UNKNOWN_AUTHOR


def extract_keywords(content: str, limit: int = KEYWORD_LIMIT) -> list[str]:
    freq = word_frequency(content)
    candidates = [
        (word, count)
        for word, count in freq.items()
        if len(word) >= MIN_KEYWORD_CHARS and word not in STOP_WORDS
    ]
    # sorted() is stable, so equal counts stay in first-seen order.
    candidates = sorted(candidates, key=lambda item: item[1], reverse=True)
    return [word for word, _ in candidates[:limit]]


def strip_extension(file_name: str) -> str:
    return _EXTENSION_RE.sub("", file_name)


__all__ = [
    "UNKNOWN_AUTHOR",
    "STOP_WORDS",
    "extract_metadata",
    "extract_title",
    "extract_author",
    "extract_keywords",
    "strip_extension",
]
