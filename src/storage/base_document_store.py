# src/storage/base_document_store.py
"""Abstract document store interface.

Every method is a suspension point of the matching pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from answerfinder.core.models import Document


class BaseDocumentStore(ABC):
    """Unified interface for question/answer document backends."""

    @abstractmethod
    async def get_by_normalized_text(self, normalized: str) -> Document | None:
        """Document whose normalized question equals `normalized`."""

    @abstractmethod
    async def get_by_keywords(self, words: Sequence[str]) -> list[Document]:
        """Documents sharing at least one keyword, deduplicated, first-seen order."""

    @abstractmethod
    async def get_all(self) -> list[Document]:
        """Every stored document in insertion order."""

    @abstractmethod
    async def get_by_id(self, document_id: str) -> Document | None:
        """Document by content-derived id."""

    @abstractmethod
    async def add_batch(self, documents: Sequence[Document]) -> int:
        """Insert or replace documents atomically. Returns the count written."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every document."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored documents."""

    async def close(self) -> None:
        """Release backend resources. Default: no-op."""
