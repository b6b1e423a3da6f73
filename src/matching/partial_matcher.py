# src/matching/partial_matcher.py
"""Tier 4: substring containment and positional word overlap."""

from __future__ import annotations

from collections.abc import Sequence

from answerfinder.core.models import Document, MatchResult
from answerfinder.core.similarity import substring_score, word_position_similarity
from answerfinder.matching.confidence import ConfidenceContext, calculate_confidence
from answerfinder.matching.tiers import Tier, build_match

PARTIAL_MIN_SCORE = 0.50
SUBSTRING_WEIGHT = 0.7
POSITION_WEIGHT = 0.3


def partial_score(normalized_query: str, candidate_text: str) -> float:
    return (
        SUBSTRING_WEIGHT * substring_score(normalized_query, candidate_text)
        + POSITION_WEIGHT * word_position_similarity(normalized_query, candidate_text)
    )


def partial_match(normalized_query: str, candidates: Sequence[Document]) -> MatchResult | None:
    if not normalized_query or not candidates:
        return None

    best: Document | None = None
    best_score = 0.0
    for candidate in candidates:
        score = partial_score(normalized_query, candidate.processed.normalized_question)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or best_score < PARTIAL_MIN_SCORE:
        return None

    confidence = calculate_confidence(
        "partial",
        best_score,
        ConfidenceContext(
            query_length=len(normalized_query),
            question_length=len(best.processed.normalized_question),
        ),
    )
    return build_match(Tier.PARTIAL, best, best_score, confidence, candidates_evaluated=len(candidates))
