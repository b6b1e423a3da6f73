# tests/integration/conftest.py
"""Shared fixtures for integration tests.

The engine runs against the real in-memory store, cache and tier matchers;
only the remote generator is replaced by a double.
"""

from __future__ import annotations

import pytest

from answerfinder.matching.engine import MatchingEngine
from answerfinder.storage.memory_store import InMemoryDocumentStore


@pytest.fixture
def engine_factory(settings, sample_documents):
    """Async builder for a MatchingEngine over a populated in-memory store."""

    async def build(documents=None, cache=None, remote=None, store=None) -> MatchingEngine:
        store = store or InMemoryDocumentStore()
        docs = sample_documents if documents is None else documents
        if docs:
            await store.add_batch(docs)
        return MatchingEngine(store, cache=cache, remote=remote, settings=settings)

    return build
