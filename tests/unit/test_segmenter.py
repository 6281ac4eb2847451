"""Unit tests for fixed-width chunking and sentence segmentation."""

import pytest

from knowbase.errors import ValidationError
from knowbase.ingestion.segmenter import (
    chunk_text,
    expected_chunk_count,
    split_key_sentences,
    split_sentences,
)


class TestChunkText:
    """Test the pure fixed-width split."""

    def test_splits_into_fixed_width_slices(self):
        assert chunk_text("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_exact_multiple_has_no_short_tail(self):
        assert chunk_text("abcdef", 3) == ["abc", "def"]

    def test_empty_content_yields_no_chunks(self):
        assert chunk_text("", 10) == []

    def test_short_content_yields_single_chunk(self):
        assert chunk_text("A short statement.", 300) == ["A short statement."]

    @pytest.mark.parametrize("size", [1, 2, 7, 13, 300])
    def test_chunks_concatenate_back_to_content(self, size):
        content = "The quick brown fox jumps.\n\nIt is fast  and clever! Really? Yes."
        chunks = chunk_text(content, size)
        assert "".join(chunks) == content
        assert all(len(c) <= size for c in chunks)
        assert len(chunks) == expected_chunk_count(len(content), size)

    def test_does_not_snap_to_word_boundaries(self):
        chunks = chunk_text("hello world", 4)
        assert chunks == ["hell", "o wo", "rld"]

    @pytest.mark.parametrize("size", [0, -1, 2.5, True])
    def test_rejects_invalid_chunk_size(self, size):
        with pytest.raises(ValidationError):
            chunk_text("content", size)


class TestExpectedChunkCount:

    def test_rounds_up(self):
        assert expected_chunk_count(301, 300) == 2

    def test_zero_length(self):
        assert expected_chunk_count(0, 300) == 0


class TestSplitSentences:
    """Test sentence boundary detection."""

    def test_splits_on_terminal_punctuation_and_whitespace(self):
        text = "First sentence. Second one! Third? Fourth."
        assert split_sentences(text) == ["First sentence.", "Second one!", "Third?", "Fourth."]

    def test_does_not_split_without_following_whitespace(self):
        assert split_sentences("Version 1.5 is out.Really") == ["Version 1.5 is out.Really"]

    def test_trims_and_drops_empty_candidates(self):
        assert split_sentences("  One.   \n\n Two.  ") == ["One.", "Two."]

    def test_empty_content(self):
        assert split_sentences("") == []
        assert split_sentences("   ") == []

    def test_trivial_sentences_are_kept(self):
        assert split_sentences("A. B. C.") == ["A.", "B.", "C."]


class TestSplitKeySentences:

    def test_drops_sentences_shorter_than_ten_characters(self):
        text = "Short. This sentence is long enough. Tiny one."
        assert split_key_sentences(text) == ["This sentence is long enough."]

    def test_ten_characters_is_kept(self):
        assert split_key_sentences("Ten chars. ok.") == ["Ten chars."]

    def test_can_filter_everything(self):
        assert split_key_sentences("short.") == []
