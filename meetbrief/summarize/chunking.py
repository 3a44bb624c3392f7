"""Token estimation and sentence-aware transcript chunking."""

import math
import re
from dataclasses import dataclass

# Terminal punctuation followed by whitespace; the punctuation stays with
# the sentence before the break.
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

CHARS_PER_TOKEN = 4


@dataclass(frozen=True)
class TextChunk:
    """A contiguous slice of the transcript, summarized on its own."""

    text: str
    index: int
    token_count: int


def estimate_token_count(text: str) -> int:
    """
    Approximate token count as one token per four characters.

    This is a sizing heuristic for English text, not a tokenizer. Providers
    bill on their own exact token counts, which will differ.
    """
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def split_sentences(text: str) -> list[str]:
    """
    Split text after ``.``, ``!`` or ``?`` followed by whitespace.

    Best effort only: abbreviations, decimals and quoted dialogue can be
    split in the wrong place.
    """
    return [s for s in _SENTENCE_BREAK.split(text) if s]


def _make_chunk(text: str, index: int) -> TextChunk:
    return TextChunk(text=text, index=index, token_count=estimate_token_count(text))


def chunk_text(text: str, max_tokens_per_chunk: int = 7000) -> list[TextChunk]:
    """
    Split text into chunks of at most max_tokens_per_chunk estimated tokens.

    Sentences are packed greedily, joined by a single space. A sentence that
    alone exceeds the limit is cut into character windows of
    ``max_tokens_per_chunk * 4`` characters.

    Raises:
        ValueError: If max_tokens_per_chunk is not positive
    """
    if max_tokens_per_chunk <= 0:
        raise ValueError("max_tokens_per_chunk must be positive")

    if estimate_token_count(text) <= max_tokens_per_chunk:
        return [_make_chunk(text, 0)]

    chunks: list[TextChunk] = []
    current = ""

    for sentence in split_sentences(text):
        candidate = f"{current} {sentence}" if current else sentence

        if estimate_token_count(candidate) <= max_tokens_per_chunk:
            current = candidate
            continue

        if current:
            chunks.append(_make_chunk(current, len(chunks)))
        current = sentence

        if estimate_token_count(sentence) > max_tokens_per_chunk:
            char_limit = max_tokens_per_chunk * CHARS_PER_TOKEN
            for start in range(0, len(sentence), char_limit):
                chunks.append(_make_chunk(sentence[start : start + char_limit], len(chunks)))
            current = ""

    if current:
        chunks.append(_make_chunk(current, len(chunks)))

    return chunks
