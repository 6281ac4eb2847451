"""Unit tests for extractive summarization."""

import pytest

from knowbase.errors import NoSentencesError, ValidationError
from knowbase.summarization.summarizer import summarize


ARTICLE = (
    "Foxes live on every continent except Antarctica. "
    "They are small members of the dog family. "
    "The most important finding is that foxes adapt well to cities. "
    "Urban foxes eat food left by people. "
    "In conclusion, foxes are remarkably flexible animals."
)


class TestExtractive:

    def test_picks_first_middle_last(self):
        result = summarize(ARTICLE, sentence_count=3, summary_type="extractive")
        assert result.summary == (
            "Foxes live on every continent except Antarctica. "
            "The most important finding is that foxes adapt well to cities. "
            "In conclusion, foxes are remarkably flexible animals."
        )
        assert result.extraction_method == "extractive"

    def test_truncates_to_sentence_count(self):
        result = summarize("A. B. C.", sentence_count=2, summary_type="extractive")
        assert result.summary == "A. B."

    def test_indices_are_deduplicated(self):
        assert summarize("Only one.", sentence_count=3).summary == "Only one."
        assert summarize("One. Two.", sentence_count=3).summary == "One. Two."

    def test_uses_unfiltered_sentences(self):
        # Under ten characters, but extractive keeps them.
        assert summarize("short.").summary == "short."

    def test_reports_lengths(self):
        result = summarize(ARTICLE, sentence_count=1)
        assert result.original_length == len(ARTICLE)
        assert result.original_sentence_count == 5
        assert result.summary_length == len(result.summary)

    def test_empty_content_raises(self):
        with pytest.raises(NoSentencesError):
            summarize("   ")


class TestKeyPoints:

    def test_prefers_keyword_sentences(self):
        result = summarize(ARTICLE, sentence_count=3, summary_type="key_points")
        assert result.summary == (
            "The most important finding is that foxes adapt well to cities. "
            "In conclusion, foxes are remarkably flexible animals."
        )

    def test_keywords_match_whole_words_only(self):
        text = "Keyboards are useful tools. Mainly used for typing text."
        # No whole-word keyword, so the first sentences are used.
        result = summarize(text, sentence_count=1, summary_type="key_points")
        assert result.summary == "Keyboards are useful tools."

    def test_keywords_are_case_insensitive(self):
        text = "Nothing to see here at all. CRITICAL systems failed today."
        result = summarize(text, sentence_count=1, summary_type="key_points")
        assert result.summary == "CRITICAL systems failed today."

    def test_short_sentences_filtered_to_nothing_raises(self):
        with pytest.raises(NoSentencesError):
            summarize("short.", summary_type="key_points")


class TestStructured:

    def test_builds_labeled_sections(self):
        result = summarize(ARTICLE, sentence_count=4, summary_type="structured")
        assert result.summary == (
            "Overview: Foxes live on every continent except Antarctica.\n\n"
            "Key Points:\n"
            "- They are small members of the dog family.\n"
            "- The most important finding is that foxes adapt well to cities.\n\n"
            "Conclusion: In conclusion, foxes are remarkably flexible animals."
        )

    def test_small_sentence_count_drops_key_points(self):
        result = summarize(ARTICLE, sentence_count=2, summary_type="structured")
        assert "Key Points" not in result.summary
        assert result.summary.startswith("Overview: ")
        assert "Conclusion: " in result.summary

    def test_single_sentence_has_only_overview(self):
        result = summarize("Just one long sentence here.", summary_type="structured")
        assert result.summary == "Overview: Just one long sentence here."

    def test_degenerate_input_raises(self):
        with pytest.raises(NoSentencesError):
            summarize("A. B. C.", summary_type="structured")


class TestValidation:

    @pytest.mark.parametrize("count", [0, -2, 1.5])
    def test_invalid_sentence_count(self, count):
        with pytest.raises(ValidationError):
            summarize(ARTICLE, sentence_count=count)

    def test_unknown_summary_type(self):
        with pytest.raises(ValidationError) as exc_info:
            summarize(ARTICLE, summary_type="abstractive")
        assert "abstractive" in str(exc_info.value)
