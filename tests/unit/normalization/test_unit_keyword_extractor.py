# tests/unit/normalization/test_unit_keyword_extractor.py
"""Tests for keyword extraction: scoring, phrases, typing and bounds."""

from __future__ import annotations

import pytest

from answerfinder.normalization.keyword_extractor import (
    MAX_KEYWORDS,
    extract_keyword_strings,
    extract_keywords,
    is_date_word,
    is_number,
    is_technical_term,
)

LONG_TEXT = " ".join(f"term{i:03d}x" for i in range(120))


def _by_word(keywords):
    return {kw.word: kw for kw in keywords}


class TestExtractKeywords:
    @pytest.mark.parametrize("value", ["", "   ", None, 17])
    def test_empty_or_invalid_input(self, value):
        assert extract_keywords(value) == []

    def test_only_stopwords_yield_nothing(self):
        assert extract_keywords("the and of") == []

    def test_short_tokens_dropped(self):
        words = extract_keyword_strings("an ox is by me")
        assert words == []

    def test_importance_bounds(self):
        for kw in extract_keywords("Explain the process of photosynthesis in green plants"):
            assert 0.0 <= kw.importance <= 1.0

    def test_sorted_by_importance(self):
        keywords = extract_keywords("python python python code review tools")
        importances = [kw.importance for kw in keywords]
        assert importances == sorted(importances, reverse=True)

    def test_unique_words(self):
        words = extract_keyword_strings("data data science data science data")
        assert len(words) == len(set(words))

    def test_default_cap(self):
        assert len(extract_keywords(LONG_TEXT)) == MAX_KEYWORDS

    def test_custom_cap(self):
        assert len(extract_keywords(LONG_TEXT, max_keywords=5)) == 5

    def test_zero_cap(self):
        assert extract_keywords("anything here", max_keywords=0) == []

    def test_repeated_token_ranks_first(self):
        by_word = _by_word(extract_keywords("python python python code", include_phrases=False))
        assert by_word["python"].importance == 1.0
        assert by_word["code"].importance < 1.0

    def test_all_unique_tokens_share_top_importance(self):
        keywords = extract_keywords("boiling point water", include_phrases=False)
        assert [kw.importance for kw in keywords] == [1.0, 1.0, 1.0]

    def test_stopwords_excluded_but_question_words_kept(self):
        words = extract_keyword_strings("what is the meaning")
        assert "what" in words
        assert "meaning" in words
        assert "the" not in words

    def test_custom_stopwords(self):
        words = extract_keyword_strings("alpha beta gamma")
        assert "beta" in words
        filtered = [
            kw.word
            for kw in extract_keywords("alpha beta gamma", include_phrases=False, stopwords={"beta"})
        ]
        assert filtered == ["alpha", "gamma"]


class TestPhrases:
    def test_bigrams_and_trigrams(self):
        words = extract_keyword_strings("machine learning models")
        assert "machine learning" in words
        assert "learning models" in words
        assert "machine learning models" in words

    def test_phrases_may_contain_stopwords(self):
        words = extract_keyword_strings("capital of the france")
        assert "the france" in words

    def test_all_stopword_phrase_skipped(self):
        words = extract_keyword_strings("cat and the dog")
        assert "and the" not in words

    def test_phrases_disabled(self):
        for kw in extract_keywords("machine learning models", include_phrases=False):
            assert " " not in kw.word


class TestKeywordTypes:
    def test_entity_for_mid_sentence_capital(self):
        by_word = _by_word(extract_keywords("We visited Paris in summer", include_phrases=False))
        assert by_word["paris"].type == "entity"
        assert by_word["visited"].type == "common"

    def test_technical_acronym(self):
        by_word = _by_word(extract_keywords("The NASA rover landed", include_phrases=False))
        assert by_word["nasa"].type == "technical"

    def test_technical_digits(self):
        by_word = _by_word(extract_keywords("Released in 2024 worldwide", include_phrases=False))
        assert by_word["2024"].type == "technical"

    def test_date_word_entity(self):
        by_word = _by_word(extract_keywords("meeting on friday morning", include_phrases=False))
        assert by_word["friday"].type == "entity"

    def test_phrase_type_common(self):
        for kw in extract_keywords("Visited Paris museums"):
            if " " in kw.word:
                assert kw.type == "common"


class TestHelpers:
    @pytest.mark.parametrize("word", ["42", "3.14", "21st", "2nd"])
    def test_is_number(self, word):
        assert is_number(word)

    @pytest.mark.parametrize("word", ["abc", "4x4", ""])
    def test_is_not_number(self, word):
        assert not is_number(word)

    def test_is_date_word(self):
        assert is_date_word("March")
        assert not is_date_word("marching")

    @pytest.mark.parametrize("word", ["iPhone", "COVID-19", "API", "user@host", "v2"])
    def test_is_technical_term(self, word):
        assert is_technical_term(word)

    @pytest.mark.parametrize("word", ["apple", "Paris", "A"])
    def test_is_not_technical_term(self, word):
        assert not is_technical_term(word)
