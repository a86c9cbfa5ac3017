"""Embedding utilities."""

from __future__ import annotations

import logging
import math
import re
from array import array
from typing import Sequence

logger = logging.getLogger(__name__)

EMBEDDING_DIM = 384

_WHITESPACE_RE = re.compile(r"\s+")


class EmbeddingModel:
    """Deterministic character-sine embedding.

    Stands in for a learned model: identical text always yields the identical
    vector, and texts sharing characters at similar token positions land
    close together. Anything exposing ``embed`` and ``dim`` can replace it.
    """

    _instances: dict[str, "EmbeddingModel"] = {}

    def __init__(self, model_name: str, dim: int = EMBEDDING_DIM) -> None:
        self.model_name = model_name
        self._dim = dim

    @classmethod
    def get(cls, model_name: str) -> "EmbeddingModel":
        key = model_name or "sinhash"
        if key not in cls._instances:
            cls._instances[key] = EmbeddingModel(model_name=key)
        return cls._instances[key]

    @property
    def dim(self) -> int:
        return self._dim

    def embed(self, text: str) -> tuple[float, ...]:
        vector = [0.0] * self._dim
        # re.split keeps the empty leading token produced by leading whitespace,
        # so token positions line up with vectors already in the store.
        for index, token in enumerate(_WHITESPACE_RE.split(text.lower())):
            weight = index + 1
            for char in token:
                code = ord(char)
                vector[code % self._dim] += math.sin(code * weight) * 0.1
        _normalize(vector)
        return tuple(vector)

    def as_bytes(self, vector: Sequence[float]) -> bytes:
        return array("d", vector).tobytes()

    def from_bytes(self, payload: bytes | None) -> tuple[float, ...]:
        if not payload:
            return ()
        floats = array("d")
        floats.frombytes(payload)
        return tuple(floats)


def embedding_text(title: str, content: str, summary: str) -> str:
    """Text a document is embedded from; a title change means a new vector."""
    return " ".join((title, content, summary))


def similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity; 0.0 for mismatched lengths or zero vectors."""
    if len(a) != len(b):
        logger.warning("Embedding dimension mismatch: %s != %s", len(a), len(b))
        return 0.0
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b))


def _normalize(vector: list[float]) -> None:
    norm = math.sqrt(sum(value * value for value in vector))
    if norm == 0:
        return
    inv = 1.0 / norm
    for idx, value in enumerate(vector):
        vector[idx] = value * inv


__all__ = ["EMBEDDING_DIM", "EmbeddingModel", "embedding_text", "similarity"]
