# src/matching/fuzzy_matcher.py
"""Tier 3: character-level similarity (Levenshtein + Jaro-Winkler)."""

from __future__ import annotations

from collections.abc import Sequence

from answerfinder.core.models import Document, MatchResult
from answerfinder.core.similarity import jaro_winkler_similarity, levenshtein_similarity
from answerfinder.matching.confidence import ConfidenceContext, calculate_confidence
from answerfinder.matching.tiers import Tier, build_match

FUZZY_MIN_SIMILARITY = 0.85
FUZZY_MAX_CANDIDATES = 50
LEVENSHTEIN_WEIGHT = 0.6
JARO_WINKLER_WEIGHT = 0.4


def fuzzy_score(normalized_query: str, candidate_text: str) -> float:
    return (
        LEVENSHTEIN_WEIGHT * levenshtein_similarity(normalized_query, candidate_text)
        + JARO_WINKLER_WEIGHT * jaro_winkler_similarity(normalized_query, candidate_text)
    )


def fuzzy_match(normalized_query: str, candidates: Sequence[Document]) -> MatchResult | None:
    """Best fuzzy match among the first FUZZY_MAX_CANDIDATES candidates."""
    if not normalized_query or not candidates:
        return None

    limited = list(candidates[:FUZZY_MAX_CANDIDATES])
    best: Document | None = None
    best_score = 0.0
    for candidate in limited:
        score = fuzzy_score(normalized_query, candidate.processed.normalized_question)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or best_score < FUZZY_MIN_SIMILARITY:
        return None

    confidence = calculate_confidence(
        "fuzzy",
        best_score,
        ConfidenceContext(
            query_length=len(normalized_query),
            question_length=len(best.processed.normalized_question),
        ),
    )
    return build_match(Tier.FUZZY, best, best_score, confidence, candidates_evaluated=len(limited))
