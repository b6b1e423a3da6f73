# src/matching/confidence.py
"""Unified confidence model shared by every match type.

Each tier maps its raw score in [0, 1] linearly into its own band; the
bands of later tiers start lower, and a partial match never reaches the
fuzzy floor. Within a type, confidence never decreases as the raw score
grows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from answerfinder.core.models import MatchType

EXACT_CONFIDENCE = 1.0
HIGH_CONFIDENCE = 0.85
MEDIUM_CONFIDENCE = 0.60
LOW_CONFIDENCE = 0.30

KEYWORD_MIN_CONFIDENCE = 0.75
KEYWORD_MAX_CONFIDENCE = 0.95
KEYWORD_LONG_QUERY = 50
KEYWORD_LONG_QUERY_BOOST = 1.1

FUZZY_MIN_CONFIDENCE = 0.60
FUZZY_MAX_CONFIDENCE = 0.80
FUZZY_LENGTH_RATIO_FLOOR = 0.7
FUZZY_LENGTH_PENALTY = 0.9

PARTIAL_MIN_CONFIDENCE = 0.30
PARTIAL_MAX_CONFIDENCE = 0.60
PARTIAL_PENALTY = 0.8

ConfidenceLevel = Literal["HIGH", "MEDIUM", "LOW", "NONE"]


@dataclass(frozen=True)
class ConfidenceContext:
    """Sizes used by the per-type adjustments.

    For keyword matches the lengths are keyword counts; for fuzzy and
    partial matches they are character lengths of the normalized texts.
    """

    query_length: int = 0
    question_length: int = 0


def calculate_confidence(
    match_type: MatchType | str,
    raw_score: float,
    context: ConfidenceContext | None = None,
) -> float:
    """Map a tier's raw score onto the shared confidence scale.

    Args:
        match_type: exact, keyword, fuzzy, partial or remote.
        raw_score: Tier-specific similarity in [0, 1].
        context: Query/candidate sizes for the length adjustments.

    Returns:
        Confidence clamped to [0, 1]. Unknown match types score 0.
    """
    ctx = context or ConfidenceContext()
    score = min(max(raw_score, 0.0), 1.0)

    if match_type == "exact":
        confidence = EXACT_CONFIDENCE
    elif match_type == "keyword":
        confidence = _scale(score, KEYWORD_MIN_CONFIDENCE, KEYWORD_MAX_CONFIDENCE)
        if ctx.query_length > KEYWORD_LONG_QUERY:
            confidence = min(confidence * KEYWORD_LONG_QUERY_BOOST, 1.0)
    elif match_type == "fuzzy":
        confidence = _scale(score, FUZZY_MIN_CONFIDENCE, FUZZY_MAX_CONFIDENCE)
        if _length_ratio(ctx.query_length, ctx.question_length) < FUZZY_LENGTH_RATIO_FLOOR:
            confidence *= FUZZY_LENGTH_PENALTY
    elif match_type == "partial":
        confidence = _scale(score, PARTIAL_MIN_CONFIDENCE, PARTIAL_MAX_CONFIDENCE)
        confidence *= PARTIAL_PENALTY
    elif match_type == "remote":
        confidence = score
    else:
        confidence = 0.0

    return max(0.0, min(1.0, confidence))


def confidence_level(confidence: float) -> ConfidenceLevel:
    if confidence >= HIGH_CONFIDENCE:
        return "HIGH"
    if confidence >= MEDIUM_CONFIDENCE:
        return "MEDIUM"
    if confidence >= LOW_CONFIDENCE:
        return "LOW"
    return "NONE"


def explain_confidence(
    match_type: MatchType | str,
    confidence: float,
    raw_score: float | None = None,
) -> str:
    """Short human-readable description of a match and its reliability."""
    percent = round((raw_score or 0.0) * 100)
    descriptions = {
        "exact": "Exact match after normalization",
        "keyword": f"{percent}% keyword overlap",
        "fuzzy": f"{percent}% text similarity",
        "partial": "Partial text match",
        "remote": "Remotely generated answer",
    }
    base = descriptions.get(match_type, "Unknown match type")

    level = confidence_level(confidence)
    if level == "HIGH":
        return base
    if level == "MEDIUM":
        return f"{base} (medium confidence)"
    if level == "LOW":
        return f"{base} (low confidence)"
    return "No reliable match found"


def is_acceptable_confidence(confidence: float, threshold: float = LOW_CONFIDENCE) -> bool:
    return confidence >= threshold


def _scale(score: float, low: float, high: float) -> float:
    return low + score * (high - low)


def _length_ratio(a: int, b: int) -> float:
    longest = max(a, b)
    if longest <= 0:
        return 1.0
    return min(a, b) / longest
