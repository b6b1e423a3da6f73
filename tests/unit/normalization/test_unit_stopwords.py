# tests/unit/normalization/test_unit_stopwords.py
"""Tests for stop-word filtering and protected words."""

from __future__ import annotations

from answerfinder.normalization.stopwords import (
    ENGLISH_STOPWORDS,
    PROTECTED_WORDS,
    is_stopword,
)


class TestIsStopword:
    def test_common_stopword(self):
        assert is_stopword("the")
        assert is_stopword("and")

    def test_content_word(self):
        assert not is_stopword("photosynthesis")

    def test_question_words_protected(self):
        for word in ("what", "who", "how", "why"):
            assert not is_stopword(word)

    def test_qualifiers_protected(self):
        assert not is_stopword("not")
        assert not is_stopword("never")

    def test_protected_even_with_custom_set(self):
        assert not is_stopword("what", stopwords={"what", "foo"})

    def test_custom_set_replaces_default(self):
        assert is_stopword("foo", stopwords={"foo"})
        assert not is_stopword("the", stopwords={"foo"})

    def test_protected_words_overlap_default_list(self):
        # protection matters only because some protected words are listed
        assert PROTECTED_WORDS & ENGLISH_STOPWORDS

