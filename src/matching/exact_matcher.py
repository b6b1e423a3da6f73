# src/matching/exact_matcher.py
"""Tier 1: exact equality of normalized question text."""

from __future__ import annotations

from answerfinder.core.models import MatchResult
from answerfinder.matching.confidence import ConfidenceContext, calculate_confidence
from answerfinder.matching.tiers import Tier, build_match
from answerfinder.storage.base_document_store import BaseDocumentStore


async def exact_match(normalized_query: str, store: BaseDocumentStore) -> MatchResult | None:
    """Look up a document by its normalized question.

    Returns:
        An exact MatchResult with confidence 1.0, or None.
    """
    if not normalized_query:
        return None

    document = await store.get_by_normalized_text(normalized_query)
    if document is None:
        return None

    confidence = calculate_confidence(
        "exact",
        1.0,
        ConfidenceContext(
            query_length=len(normalized_query),
            question_length=len(document.processed.normalized_question),
        ),
    )
    return build_match(Tier.EXACT, document, 1.0, confidence, candidates_evaluated=1)
