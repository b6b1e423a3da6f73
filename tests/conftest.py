# tests/conftest.py
"""Shared test fixtures for all unit and integration tests.

Provides sample Q&A documents, settings without a .env file, and a mock
remote generator. No network access: remote calls are mocked.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from answerfinder.cache.query_cache import QueryCache
from answerfinder.config.settings import Settings
from answerfinder.core.models import Document, RemoteResponse
from answerfinder.ingestion.document_builder import build_document
from answerfinder.remote.base_remote import BaseRemoteGenerator

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

SAMPLE_PAIRS = [
    ("What is the capital of France?", "Paris"),
    ("Who wrote the novel Pride and Prejudice?", "Jane Austen"),
    ("What is the boiling point of water at sea level?", "100 degrees Celsius"),
    ("How do I reset my password on the company portal?", "Use the Forgot password link"),
    ("Explain the process of photosynthesis in plants", "Plants turn light into chemical energy"),
]


# === FIXTURES: Sample data ===


def make_documents(pairs=SAMPLE_PAIRS, file_name: str = "sample.txt") -> list[Document]:
    """Build documents the way the parsers do, one per pair."""
    return [
        build_document(q, a, line_number=i * 2 + 1, file_name=file_name, now=FIXED_NOW)
        for i, (q, a) in enumerate(pairs)
    ]


@pytest.fixture
def sample_documents() -> list[Document]:
    return make_documents()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache(max_size=10, ttl_seconds=60)


# === FIXTURES: Remote ===


class FakeRemote(BaseRemoteGenerator):
    """Remote generator double whose generate() is an AsyncMock."""

    def __init__(self, response: RemoteResponse | None = None, endpoint: str = "http://remote.test"):
        self._endpoint = endpoint
        self.generate = AsyncMock(
            return_value=response
            or RemoteResponse(
                success=True, answer="Generated answer", reasoning="Because", confidence=0.7,
            )
        )
        self.closed = False

    async def generate(self, request):  # replaced per instance in __init__
        raise NotImplementedError

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def make_fake_remote():
    """Factory for additional FakeRemote instances within one test."""
    return FakeRemote
