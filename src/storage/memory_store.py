# src/storage/memory_store.py
"""In-memory document store with normalized-text and keyword indexes.

Writers are serialized by an asyncio.Lock and publish a fresh immutable
snapshot; readers grab the current snapshot once and never observe a
half-applied batch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from answerfinder.core.errors import StoreTransactionError, StoreUnavailableError
from answerfinder.core.models import Document
from answerfinder.storage.base_document_store import BaseDocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Snapshot:
    documents: Mapping[str, Document] = field(default_factory=dict)
    by_text: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    by_keyword: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


def _build_snapshot(documents: dict[str, Document]) -> _Snapshot:
    by_text: dict[str, list[str]] = {}
    by_keyword: dict[str, list[str]] = {}
    for doc_id, doc in documents.items():
        by_text.setdefault(doc.processed.normalized_question, []).append(doc_id)
        for word in dict.fromkeys(doc.keyword_words):
            by_keyword.setdefault(word, []).append(doc_id)
    return _Snapshot(
        documents=MappingProxyType(documents),
        by_text=MappingProxyType({k: tuple(v) for k, v in by_text.items()}),
        by_keyword=MappingProxyType({k: tuple(v) for k, v in by_keyword.items()}),
    )


class InMemoryDocumentStore(BaseDocumentStore):
    """Process-local store. Re-adding an existing id replaces the document."""

    def __init__(self) -> None:
        self._snapshot = _Snapshot()
        self._write_lock = asyncio.Lock()
        self._closed = False

    # --- Reads ---

    async def get_by_normalized_text(self, normalized: str) -> Document | None:
        snap = self._current()
        ids = snap.by_text.get(normalized)
        if not ids:
            return None
        return snap.documents[ids[0]]

    async def get_by_keywords(self, words: Sequence[str]) -> list[Document]:
        snap = self._current()
        seen: dict[str, Document] = {}
        for word in words:
            for doc_id in snap.by_keyword.get(word, ()):
                if doc_id not in seen:
                    seen[doc_id] = snap.documents[doc_id]
        return list(seen.values())

    async def get_all(self) -> list[Document]:
        return list(self._current().documents.values())

    async def get_by_id(self, document_id: str) -> Document | None:
        return self._current().documents.get(document_id)

    async def count(self) -> int:
        return len(self._current().documents)

    # --- Writes ---

    async def add_batch(self, documents: Sequence[Document]) -> int:
        """Insert or replace a batch; nothing is published if any item is invalid."""
        self._ensure_open()
        async with self._write_lock:
            merged = dict(self._snapshot.documents)
            for position, doc in enumerate(documents):
                if not isinstance(doc, Document):
                    raise StoreTransactionError(
                        "Batch rejected: item is not a Document",
                        details={"position": position, "type": type(doc).__name__},
                    )
                merged.pop(doc.id, None)
                merged[doc.id] = doc
            self._snapshot = _build_snapshot(merged)
        logger.debug("Stored batch of %d documents (total %d)", len(documents), len(merged))
        return len(documents)

    async def clear(self) -> None:
        self._ensure_open()
        async with self._write_lock:
            self._snapshot = _Snapshot()
        logger.debug("Document store cleared")

    async def close(self) -> None:
        self._closed = True
        self._snapshot = _Snapshot()

    # --- Internals ---

    def _current(self) -> _Snapshot:
        self._ensure_open()
        return self._snapshot

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Document store is closed")
