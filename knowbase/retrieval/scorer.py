"""Hybrid lexical relevance scoring.

A cheap additive heuristic rather than a statistical model: there is no IDF
and no length normalisation, so long chunks are not penalised and common
words count as much as rare ones.
"""

FULL_QUERY_IN_CONTENT = 1.0
FULL_QUERY_IN_SOURCE = 0.5
WORD_IN_CONTENT = 0.1
MIN_WORD_LENGTH = 3


def query_words(query: str) -> list[str]:
    """Distinct lowercased query words long enough to score, in query order."""
    words: dict[str, None] = {}
    for word in query.lower().split():
        if len(word) >= MIN_WORD_LENGTH:
            words.setdefault(word, None)
    return list(words)


def score_chunk(query: str, content: str, source: str = "") -> float:
    """Score a chunk's content (and its document source) against a query.

    The empty query is a substring of everything, so it scores every chunk
    at FULL_QUERY_IN_CONTENT + FULL_QUERY_IN_SOURCE.
    """
    query_lower = query.lower()
    content_lower = content.lower()

    score = 0.0
    if query_lower in content_lower:
        score += FULL_QUERY_IN_CONTENT
    if query_lower in source.lower():
        score += FULL_QUERY_IN_SOURCE
    for word in query_words(query_lower):
        if word in content_lower:
            score += WORD_IN_CONTENT
    return score
