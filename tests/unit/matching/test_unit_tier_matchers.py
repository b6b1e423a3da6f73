# tests/unit/matching/test_unit_tier_matchers.py
"""Tests for the individual matching tiers."""

from __future__ import annotations

import pytest

from answerfinder.core.models import Keyword
from answerfinder.ingestion.document_builder import build_document
from answerfinder.matching.exact_matcher import exact_match
from answerfinder.matching.fuzzy_matcher import (
    FUZZY_MAX_CANDIDATES,
    FUZZY_MIN_SIMILARITY,
    fuzzy_match,
    fuzzy_score,
)
from answerfinder.matching.keyword_matcher import (
    importance_share,
    keyword_match,
    keyword_score,
)
from answerfinder.matching.partial_matcher import PARTIAL_MIN_SCORE, partial_match, partial_score
from answerfinder.matching.tiers import LOCAL_TIERS, Tier, build_match
from answerfinder.normalization.keyword_extractor import extract_keywords
from answerfinder.normalization.text_normalizer import normalize_for_matching
from answerfinder.storage.memory_store import InMemoryDocumentStore


@pytest.fixture
def austen():
    return build_document("Who wrote the novel Pride and Prejudice?", "Jane Austen", 3, "lit.txt")


@pytest.fixture
def password():
    return build_document(
        "How do I reset my password on the company portal?", "Use the Forgot password link", 7,
    )


@pytest.fixture
def capital():
    return build_document("What is the capital of France?", "Paris", 1, "geo.txt")


def _kw(word, importance=1.0):
    return Keyword(word=word, importance=importance)


class TestTiers:
    def test_ordering(self):
        assert Tier.NONE < Tier.EXACT < Tier.KEYWORD < Tier.FUZZY < Tier.PARTIAL < Tier.REMOTE
        assert Tier.REMOTE not in LOCAL_TIERS

    def test_match_type_and_method(self):
        assert Tier.KEYWORD.match_type == "keyword"
        assert Tier.PARTIAL.method == "partial_substring"

    def test_build_match_takes_stored_answer(self, capital):
        match = build_match(Tier.FUZZY, capital, 1.2, 0.8, candidates_evaluated=4)
        assert match.answer == "Paris"
        assert match.raw_score == 1.0
        assert match.tier_metadata.tier == 3
        assert match.tier_metadata.candidates_evaluated == 4
        assert match.explanation


class TestExactMatch:
    @pytest.mark.asyncio
    async def test_hit(self, capital):
        store = InMemoryDocumentStore()
        await store.add_batch([capital])
        match = await exact_match(normalize_for_matching("what is the CAPITAL of france"), store)
        assert match is not None
        assert match.confidence == 1.0
        assert match.match_type == "exact"
        assert match.document.id == capital.id

    @pytest.mark.asyncio
    async def test_miss(self, capital):
        store = InMemoryDocumentStore()
        await store.add_batch([capital])
        assert await exact_match("what is the capital of spain", store) is None

    @pytest.mark.asyncio
    async def test_empty_query(self):
        assert await exact_match("", InMemoryDocumentStore()) is None


class TestKeywordMatch:
    def test_score_plain_overlap(self):
        score = keyword_score([_kw("a"), _kw("b")], [_kw("a"), _kw("b"), _kw("c")])
        assert score == pytest.approx((2 / 3) * 1.2)

    def test_score_capped(self):
        assert keyword_score([_kw("a")], [_kw("a")]) == 1.0

    def test_importance_share(self):
        share = importance_share([_kw("a", 1.0), _kw("b", 0.5)], ["a"])
        assert share == pytest.approx(1 / 1.5)

    def test_importance_share_empty(self):
        assert importance_share([], ["a"]) == 0.0

    def test_near_duplicate_passes_gate(self, austen, capital):
        query = extract_keywords("Who wrote the novel Pride & Prejudice?")
        match = keyword_match(query, [capital, austen])
        assert match is not None
        assert match.document.id == austen.id
        assert match.raw_score == pytest.approx((12 / 18) * (1 + 0.2 * 12 / 14))
        assert 0.75 <= match.confidence <= 0.95
        assert "pride and" not in match.tier_metadata.matched_keywords
        assert "prejudice" in match.tier_metadata.matched_keywords
        assert match.tier_metadata.candidates_evaluated == 2

    def test_weak_overlap_rejected(self, password):
        assert keyword_match(extract_keywords("how do i reset my password"), [password]) is None

    def test_no_keywords_or_candidates(self, austen):
        assert keyword_match([], [austen]) is None
        assert keyword_match(extract_keywords("pride prejudice"), []) is None


class TestFuzzyMatch:
    def test_score_identical(self):
        assert fuzzy_score("same text", "same text") == pytest.approx(1.0)

    def test_small_edit_matches(self, austen, capital):
        query = normalize_for_matching("Who wrote novel Pride and Prejudice?")
        match = fuzzy_match(query, [capital, austen])
        assert match is not None
        assert match.document.id == austen.id
        assert match.raw_score >= FUZZY_MIN_SIMILARITY
        assert 0.6 <= match.confidence <= 0.8

    def test_distant_text_rejected(self, capital):
        assert fuzzy_match("completely unrelated words here", [capital]) is None

    def test_candidate_limit(self, capital):
        candidates = [capital] * (FUZZY_MAX_CANDIDATES + 10)
        match = fuzzy_match(capital.processed.normalized_question, candidates)
        assert match.tier_metadata.candidates_evaluated == FUZZY_MAX_CANDIDATES

    def test_empty_inputs(self, capital):
        assert fuzzy_match("", [capital]) is None
        assert fuzzy_match("anything", []) is None


class TestPartialMatch:
    def test_score_prefix(self):
        score = partial_score(
            "how do i reset my password", "how do i reset my password on the company portal"
        )
        assert score == pytest.approx(0.7 * 26 / 48 + 0.3 * 0.6)

    def test_prefix_query_matches(self, password, capital):
        match = partial_match("how do i reset my password", [capital, password])
        assert match is not None
        assert match.document.id == password.id
        assert match.raw_score >= PARTIAL_MIN_SCORE
        assert 0.30 <= match.confidence <= 0.60

    def test_short_fragment_rejected(self, password):
        assert partial_match("company portal", [password]) is None

    def test_empty_inputs(self, password):
        assert partial_match("", [password]) is None
        assert partial_match("anything", []) is None
