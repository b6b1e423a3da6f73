# src/cache/models.py
"""Query cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from pydantic import BaseModel

from answerfinder.core.models import FindAnswerResult


class CacheEntry(BaseModel):
    """Cached successful result keyed by the raw-query hash."""

    key: str
    value: FindAnswerResult
    inserted_at: float


class CacheStats(BaseModel):
    """Occupancy snapshot of the query cache."""

    size: int
    max_size: int
    utilization_percent: float
