"""Extractive summarization without a language model.

Three strategies pick sentences out of the original text:

- extractive: first, middle and last sentence.
- key_points: sentences mentioning a key-point keyword, falling back to the
  opening sentences.
- structured: labeled Overview / Key Points / Conclusion sections.
"""

import logging
import re

from knowbase.errors import NoSentencesError, ValidationError
from knowbase.ingestion.segmenter import split_key_sentences, split_sentences
from knowbase.models.enums import SummaryType
from knowbase.models.results import SummaryResult

logger = logging.getLogger(__name__)

DEFAULT_SENTENCE_COUNT = 3

KEY_POINT_KEYWORDS = (
    "important",
    "key",
    "significant",
    "essential",
    "critical",
    "main",
    "primary",
    "conclusion",
    "result",
    "finding",
)
KEY_POINT_PATTERN = re.compile(
    r"\b(?:" + "|".join(KEY_POINT_KEYWORDS) + r")\b", re.IGNORECASE
)


def _parse_summary_type(summary_type) -> SummaryType:
    if isinstance(summary_type, SummaryType):
        return summary_type
    try:
        return SummaryType(str(summary_type).lower())
    except ValueError as e:
        raise ValidationError(
            "summary_type", summary_type, "expected 'extractive', 'key_points' or 'structured'"
        ) from e


def _extractive(sentences: list[str], sentence_count: int) -> str:
    n = len(sentences)
    indices = sorted({0, n // 2, n - 1})[:sentence_count]
    return " ".join(sentences[i] for i in indices)


def _key_points(sentences: list[str], sentence_count: int) -> str:
    picked = [s for s in sentences if KEY_POINT_PATTERN.search(s)][:sentence_count]
    if not picked:
        picked = sentences[:sentence_count]
    return " ".join(picked)


def _structured(sentences: list[str], sentence_count: int) -> str:
    sections = [f"Overview: {sentences[0]}"]

    interior = sentences[1:-1][:max(sentence_count - 2, 0)]
    if interior:
        bullets = "\n".join(f"- {s}" for s in interior)
        sections.append(f"Key Points:\n{bullets}")

    if len(sentences) > 1:
        sections.append(f"Conclusion: {sentences[-1]}")

    return "\n\n".join(sections)


_STRATEGIES = {
    SummaryType.EXTRACTIVE: _extractive,
    SummaryType.KEY_POINTS: _key_points,
    SummaryType.STRUCTURED: _structured,
}


def summarize(
    document_content: str,
    sentence_count: int = DEFAULT_SENTENCE_COUNT,
    summary_type: SummaryType | str = SummaryType.EXTRACTIVE,
) -> SummaryResult:
    """Summarize content by extracting sentences.

    Args:
        document_content: Full text to summarize.
        sentence_count: Upper bound on extracted sentences (>= 1).
        summary_type: One of extractive, key_points, structured.

    Raises:
        ValidationError: If sentence_count or summary_type is invalid.
        NoSentencesError: If no sentence survives segmentation. key_points
            and structured drop sentences under 10 characters first, so very
            short input can fail for them but not for extractive.
    """
    if isinstance(sentence_count, bool) or not isinstance(sentence_count, int) or sentence_count < 1:
        raise ValidationError("sentence_count", sentence_count, "must be an integer >= 1")
    kind = _parse_summary_type(summary_type)

    all_sentences = split_sentences(document_content)
    if kind == SummaryType.EXTRACTIVE:
        sentences = all_sentences
    else:
        sentences = split_key_sentences(document_content)

    if not sentences:
        logger.warning(
            "No sentences to summarize (%s, content length %d)", kind.value, len(document_content)
        )
        raise NoSentencesError(kind.value)

    summary = _STRATEGIES[kind](sentences, sentence_count)
    logger.info(
        "Summarized %d characters into %d (%s)", len(document_content), len(summary), kind.value
    )
    return SummaryResult(
        original_length=len(document_content),
        original_sentence_count=len(all_sentences),
        summary_length=len(summary),
        summary=summary,
        extraction_method=kind.value,
    )
