"""Content analysis: classification, metadata, summaries."""

from .classifier import classify
from .metadata import extract_metadata
from .summarizer import summarize
from .text import extract_entities, word_frequency

__all__ = [
    "classify",
    "extract_metadata",
    "summarize",
    "extract_entities",
    "word_frequency",
]
