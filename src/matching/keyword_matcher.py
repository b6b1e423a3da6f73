# src/matching/keyword_matcher.py
"""Tier 2: keyword-set overlap weighted by keyword importance."""

from __future__ import annotations

from collections.abc import Sequence

from answerfinder.core.models import Document, Keyword, MatchResult
from answerfinder.core.similarity import jaccard_similarity
from answerfinder.matching.confidence import (
    KEYWORD_MIN_CONFIDENCE,
    ConfidenceContext,
    calculate_confidence,
)
from answerfinder.matching.tiers import Tier, build_match

# Overlap gate coupled to the keyword confidence floor.
KEYWORD_MIN_OVERLAP = KEYWORD_MIN_CONFIDENCE
IMPORTANCE_BOOST_WEIGHT = 0.2


def keyword_score(query_keywords: Sequence[Keyword], candidate_keywords: Sequence[Keyword]) -> float:
    """Jaccard overlap boosted by the share of query importance matched, capped at 1."""
    query_words = [kw.word for kw in query_keywords]
    candidate_words = [kw.word for kw in candidate_keywords]
    similarity = jaccard_similarity(query_words, candidate_words)
    boost = importance_share(query_keywords, candidate_words)
    return min(similarity * (1.0 + boost * IMPORTANCE_BOOST_WEIGHT), 1.0)


def importance_share(query_keywords: Sequence[Keyword], candidate_words: Sequence[str]) -> float:
    """Fraction of the query's importance mass present in the candidate."""
    present = set(candidate_words)
    total = 0.0
    matched = 0.0
    for word, importance in {kw.word: kw.importance for kw in query_keywords}.items():
        total += importance
        if word in present:
            matched += importance
    return matched / total if total > 0 else 0.0


def keyword_match(
    query_keywords: Sequence[Keyword],
    candidates: Sequence[Document],
) -> MatchResult | None:
    """Best keyword-overlap match among `candidates`, or None below the gate."""
    if not query_keywords or not candidates:
        return None

    best: Document | None = None
    best_score = 0.0
    for candidate in candidates:
        score = keyword_score(query_keywords, candidate.processed.keywords)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or best_score < KEYWORD_MIN_OVERLAP:
        return None

    query_words = [kw.word for kw in query_keywords]
    candidate_words = set(best.keyword_words)
    confidence = calculate_confidence(
        "keyword",
        best_score,
        ConfidenceContext(
            query_length=len(query_words),
            question_length=len(candidate_words),
        ),
    )
    return build_match(
        Tier.KEYWORD,
        best,
        best_score,
        confidence,
        candidates_evaluated=len(candidates),
        matched_keywords=[w for w in query_words if w in candidate_words],
    )
