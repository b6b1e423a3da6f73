# src/api/facade.py
"""Public API facade: application context and the find_answer entry point.

Usage:
    from answerfinder.api.facade import AppContext, find_answer

    async with AppContext.create() as ctx:
        await ctx.import_file("questions.txt")
        result = await find_answer("What is the capital of France?", context=ctx)
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from types import TracebackType

from answerfinder.api.models import ImportReport
from answerfinder.cache.query_cache import QueryCache
from answerfinder.config.settings import Settings, load_settings
from answerfinder.core.errors import ErrorInfo, QueryValidationError, log_error
from answerfinder.core.hashing import query_fingerprint
from answerfinder.core.models import FindAnswerResult, PipelineOptions
from answerfinder.ingestion.parser_factory import parse_file
from answerfinder.matching.engine import MatchingEngine
from answerfinder.remote.base_remote import BaseRemoteGenerator
from answerfinder.remote.remote_factory import create_remote_generator
from answerfinder.storage.base_document_store import BaseDocumentStore
from answerfinder.storage.memory_store import InMemoryDocumentStore

logger = logging.getLogger(__name__)


class AppContext:
    """Owns the settings, store, cache, remote generator and engine of one process.

    Built once with create() and torn down with aclose(); nothing here is a
    module-level singleton.
    """

    def __init__(
        self,
        settings: Settings,
        store: BaseDocumentStore,
        cache: QueryCache,
        remote: BaseRemoteGenerator | None,
        engine: MatchingEngine,
    ):
        self.settings = settings
        self.store = store
        self.cache = cache
        self.remote = remote
        self.engine = engine

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        store: BaseDocumentStore | None = None,
        remote: BaseRemoteGenerator | None = None,
    ) -> AppContext:
        """Wire the default collaborators, overridable for tests or embedding."""
        settings = settings or load_settings()
        store = store or InMemoryDocumentStore()
        cache = QueryCache(
            max_size=settings.cache_max_size,
            ttl_seconds=settings.cache_ttl_seconds,
        )
        if remote is None and settings.remote_enabled:
            remote = create_remote_generator(settings)
        engine = MatchingEngine(store=store, cache=cache, remote=remote, settings=settings)
        logger.debug(
            "AppContext created (remote %s)", "configured" if remote else "not configured"
        )
        return cls(settings, store, cache, remote, engine)

    async def import_file(self, path: str | Path) -> ImportReport:
        """Parse a Q&A file and add its documents to the store.

        Raises:
            UnsupportedFormatError, IngestionError: The file cannot be parsed.
        """
        result = parse_file(path, max_bytes=self.settings.max_file_size_bytes)
        imported = await self.engine.import_documents(result.documents)
        return ImportReport(
            file_name=result.metadata.file_name,
            format=result.metadata.format,
            imported=imported,
            issues=result.issues,
        )

    async def aclose(self) -> None:
        await self.engine.aclose()
        if self.remote is not None:
            await self.remote.aclose()
        await self.store.close()
        self.cache.clear()

    async def __aenter__(self) -> AppContext:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


async def find_answer(
    query: object,
    options: PipelineOptions | None = None,
    context: AppContext | None = None,
) -> FindAnswerResult:
    """Answer a question. Every failure comes back as a failed result.

    Args:
        query: Raw user question.
        options: Per-call options. Defaults come from the context settings.
        context: Application context. When None a temporary context with an
            empty store is used and closed afterwards.

    Returns:
        FindAnswerResult; `error` is set when the query was rejected or an
        unexpected failure occurred (kind `UNKNOWN`).
    """
    owned = context is None
    ctx = context or AppContext.create()
    t0 = time.perf_counter()
    try:
        return await ctx.engine.find_answer(query, options)
    except Exception as e:
        stage = "validate" if isinstance(e, QueryValidationError) else "engine"
        log_error(e, stage, query_fingerprint(query))  # type: ignore[arg-type]
        info = ErrorInfo.from_exception(e)
        return FindAnswerResult(
            success=False,
            tier=0,
            message=info.message,
            error=info,
            processing_time_ms=round((time.perf_counter() - t0) * 1000, 3),
        )
    finally:
        if owned:
            await ctx.aclose()
