"""Summarization modules."""

from .chunking import TextChunk, chunk_text, estimate_token_count, split_sentences
from .pipeline import PLACEHOLDER, ProviderStatus, Summarizer, summarize_transcript
from .schema import SummaryResult

__all__ = [
    "PLACEHOLDER",
    "ProviderStatus",
    "SummaryResult",
    "Summarizer",
    "TextChunk",
    "chunk_text",
    "estimate_token_count",
    "split_sentences",
    "summarize_transcript",
]
