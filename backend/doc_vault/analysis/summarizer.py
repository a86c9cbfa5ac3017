"""Extractive summarizer driven by whole-document word frequency."""

from __future__ import annotations

import re

from doc_vault.analysis.text import tokenize, word_frequency

MIN_SENTENCE_CHARS = 20
SUMMARY_SENTENCES = 3
FALLBACK_CHARS = 300

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def split_sentences(content: str) -> list[str]:
    """Stripped sentences longer than ``MIN_SENTENCE_CHARS``."""
    sentences = (part.strip() for part in _SENTENCE_SPLIT_RE.split(content))
    return [sentence for sentence in sentences if len(sentence) > MIN_SENTENCE_CHARS]


def summarize(content: str) -> str:
    sentences = split_sentences(content)
    if len(sentences) <= SUMMARY_SENTENCES:
        return _leading_excerpt(content)

    freq = word_frequency(content)
    scored = [
        (index, sentence, _sentence_score(sentence, freq))
        for index, sentence in enumerate(sentences)
    ]
    # Highest score first; equal scores keep their position in the document.
    scored.sort(key=lambda item: (-item[2], item[0]))
    top = [sentence for _, sentence, _ in scored[:SUMMARY_SENTENCES]]
    return ". ".join(top) + "."


def _sentence_score(sentence: str, freq: dict[str, int]) -> float:
    words = tokenize(sentence)
    if not words:
        return 0.0
    return sum(freq.get(word, 0) for word in words) / len(words)


def _leading_excerpt(content: str) -> str:
    if len(content) > FALLBACK_CHARS:
        return content[:FALLBACK_CHARS] + "..."
    return content


__all__ = ["summarize", "split_sentences"]
