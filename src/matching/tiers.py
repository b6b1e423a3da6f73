# src/matching/tiers.py
"""Closed set of matching tiers and the shared result builder."""

from __future__ import annotations

from enum import IntEnum

from answerfinder.core.models import Document, MatchResult, MatchType, TierMetadata
from answerfinder.matching.confidence import explain_confidence


class Tier(IntEnum):
    """Cascade position of each strategy. 0 means no tier produced a match."""

    NONE = 0
    EXACT = 1
    KEYWORD = 2
    FUZZY = 3
    PARTIAL = 4
    REMOTE = 5

    @property
    def match_type(self) -> MatchType:
        return _MATCH_TYPES[self]

    @property
    def method(self) -> str:
        return _METHODS[self]


_MATCH_TYPES: dict[Tier, MatchType] = {
    Tier.EXACT: "exact",
    Tier.KEYWORD: "keyword",
    Tier.FUZZY: "fuzzy",
    Tier.PARTIAL: "partial",
    Tier.REMOTE: "remote",
}

_METHODS: dict[Tier, str] = {
    Tier.EXACT: "exact_normalized",
    Tier.KEYWORD: "keyword_jaccard",
    Tier.FUZZY: "fuzzy_similarity",
    Tier.PARTIAL: "partial_substring",
    Tier.REMOTE: "remote_generation",
}

LOCAL_TIERS: tuple[Tier, ...] = (Tier.EXACT, Tier.KEYWORD, Tier.FUZZY, Tier.PARTIAL)


def build_match(
    tier: Tier,
    document: Document,
    raw_score: float,
    confidence: float,
    candidates_evaluated: int = 0,
    matched_keywords: list[str] | None = None,
) -> MatchResult:
    """MatchResult for a local tier, answer taken from the stored document."""
    raw = min(max(raw_score, 0.0), 1.0)
    return MatchResult(
        document=document,
        answer=document.original.answer,
        match_type=tier.match_type,
        confidence=confidence,
        raw_score=raw,
        explanation=explain_confidence(tier.match_type, confidence, raw),
        tier_metadata=TierMetadata(
            tier=int(tier),
            method=tier.method,
            candidates_evaluated=candidates_evaluated,
            matched_keywords=matched_keywords or [],
        ),
    )
