"""Word statistics and regex entity extraction."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from doc_vault.models.entities import EntitySet

ENTITY_CAP = 10

_NON_WORD_RE = re.compile(r"[^\w\s]")

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
)


@dataclass(slots=True, frozen=True)
class EntityPattern:
    """One entity family. Matches of all ``regexes`` are merged by text position."""

    kind: str
    regexes: tuple[re.Pattern[str], ...]

    def find(self, text: str, cap: int = ENTITY_CAP) -> list[str]:
        hits: list[tuple[int, str]] = []
        for regex in self.regexes:
            hits.extend((match.start(), match.group(0)) for match in regex.finditer(text))
        hits.sort(key=lambda item: item[0])
        return _first_distinct((value for _, value in hits), cap)


_PATTERNS: list[EntityPattern] = [
    EntityPattern(
        kind="people",
        regexes=(re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b"),),
    ),
    EntityPattern(
        kind="organizations",
        regexes=(
            re.compile(r"\b[A-Z][a-z]+ (?:Corp|Corporation|Inc|LLC|Ltd|Company)\b|\b[A-Z][a-z]+ Co\."),
            re.compile(r"\b[A-Z][A-Z]+ [A-Z][a-z]+\b"),
        ),
    ),
    EntityPattern(
        kind="amounts",
        regexes=(
            re.compile(r"\$[\d,]+(?:\.\d{2})?|\d+(?:,\d{3})*(?:\.\d{2})?\s*(?:USD|dollars?)"),
        ),
    ),
    EntityPattern(
        kind="dates",
        regexes=(
            re.compile(r"\d{1,2}/\d{1,2}/\d{4}"),
            re.compile(r"\d{1,2}-\d{1,2}-\d{4}"),
            re.compile(rf"\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}\b"),
        ),
    ),
]


def register_pattern(pattern: EntityPattern) -> None:
    """Add an entity family; existing families are left untouched."""
    if any(existing.kind == pattern.kind for existing in _PATTERNS):
        raise ValueError(f"Entity pattern '{pattern.kind}' already registered")
    _PATTERNS.append(pattern)


def tokenize(text: str) -> list[str]:
    """Lowercase tokens with punctuation stripped, in text order."""
    return _NON_WORD_RE.sub(" ", text.lower()).split()


def word_frequency(text: str) -> dict[str, int]:
    """Count every token; dict order is first-seen order."""
    freq: dict[str, int] = {}
    for token in tokenize(text):
        freq[token] = freq.get(token, 0) + 1
    return freq


def extract(text: str, kind: str) -> list[str]:
    for pattern in _PATTERNS:
        if pattern.kind == kind:
            return pattern.find(text)
    raise KeyError(f"No entity pattern registered for '{kind}'")


def extract_all(text: str) -> dict[str, list[str]]:
    """Run every registered family, including ones added via ``register_pattern``."""
    return {pattern.kind: pattern.find(text) for pattern in _PATTERNS}


def extract_people(text: str) -> list[str]:
    return extract(text, "people")


def extract_organizations(text: str) -> list[str]:
    return extract(text, "organizations")


def extract_amounts(text: str) -> list[str]:
    return extract(text, "amounts")


def extract_dates(text: str) -> list[str]:
    return extract(text, "dates")


def extract_entities(text: str) -> EntitySet:
    found = extract_all(text)
    return EntitySet(
        people=tuple(found.get("people", ())),
        organizations=tuple(found.get("organizations", ())),
        amounts=tuple(found.get("amounts", ())),
        dates=tuple(found.get("dates", ())),
    )


def _first_distinct(values: Iterable[str], cap: int) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
        if len(unique) >= cap:
            break
    return unique


__all__ = [
    "ENTITY_CAP",
    "EntityPattern",
    "register_pattern",
    "tokenize",
    "word_frequency",
    "extract",
    "extract_all",
    "extract_people",
    "extract_organizations",
    "extract_amounts",
    "extract_dates",
    "extract_entities",
]
