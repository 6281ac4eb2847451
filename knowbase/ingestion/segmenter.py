"""Fixed-width chunking and sentence segmentation.

Chunk sizes are measured in characters. Chunks are a pure fixed-width split
with no word or sentence awareness, so concatenating them in order always
reproduces the input exactly.
"""

import math
import re

from knowbase.errors import ValidationError

# Whitespace that immediately follows sentence-ending punctuation.
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

# Sentences shorter than this are treated as noise by key-point style summaries.
MIN_KEY_SENTENCE_LENGTH = 10


def _check_chunk_size(chunk_size: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise ValidationError("chunk_size", chunk_size, "must be an integer >= 1")


def chunk_text(content: str, chunk_size: int) -> list[str]:
    """Partition content into consecutive slices of at most chunk_size characters."""
    _check_chunk_size(chunk_size)
    return [content[start:start + chunk_size] for start in range(0, len(content), chunk_size)]


def expected_chunk_count(content_length: int, chunk_size: int) -> int:
    """Number of chunks chunk_text produces for content of the given length."""
    _check_chunk_size(chunk_size)
    return math.ceil(content_length / chunk_size)


def split_sentences(content: str) -> list[str]:
    """Split text into trimmed, non-empty sentences."""
    sentences = []
    for candidate in SENTENCE_BOUNDARY.split(content):
        candidate = candidate.strip()
        if candidate:
            sentences.append(candidate)
    return sentences


def split_key_sentences(content: str) -> list[str]:
    """Like split_sentences, minus sentences too short to carry a point."""
    return [s for s in split_sentences(content) if len(s) >= MIN_KEY_SENTENCE_LENGTH]
