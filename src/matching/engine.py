# src/matching/engine.py
"""Matching engine: tiered cascade from exact match to remote fallback.

Order: cache -> exact -> keyword -> fuzzy -> partial -> remote. The first
tier whose best match reaches `min_confidence` ends the cascade. Only
successful results are cached, keyed by the hash of the raw query.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import cast

from pydantic import BaseModel

from answerfinder.cache.models import CacheStats
from answerfinder.cache.query_cache import QueryCache
from answerfinder.config.settings import Settings, load_settings
from answerfinder.core.errors import (
    ErrorInfo,
    QueryEmptyError,
    QueryTooLongError,
    RemoteTimeoutError,
    log_error,
    user_message,
)
from answerfinder.core.hashing import cache_key, query_fingerprint
from answerfinder.core.models import (
    Document,
    FindAnswerResult,
    Keyword,
    MatchResult,
    PipelineOptions,
    RemoteRequest,
    RemoteResponse,
    TierMetadata,
)
from answerfinder.logging.context import query_context, set_stage
from answerfinder.matching.confidence import calculate_confidence, explain_confidence
from answerfinder.matching.exact_matcher import exact_match
from answerfinder.matching.fuzzy_matcher import fuzzy_match
from answerfinder.matching.keyword_matcher import keyword_match
from answerfinder.matching.partial_matcher import partial_match
from answerfinder.matching.tiers import LOCAL_TIERS, Tier
from answerfinder.normalization.keyword_extractor import extract_keywords
from answerfinder.normalization.text_normalizer import normalize_for_matching
from answerfinder.remote.base_remote import BaseRemoteGenerator
from answerfinder.remote.remote_factory import create_remote_generator
from answerfinder.storage.base_document_store import BaseDocumentStore

logger = logging.getLogger(__name__)

MSG_NO_DATA = (
    "No Q&A data loaded yet. Import a question file, or enable the remote "
    "fallback for generated answers."
)
MSG_REMOTE_DISABLED = (
    "No match found in the loaded questions. Enable the remote fallback for "
    "better results."
)
MSG_NO_MATCH = "No match met the confidence threshold."


class EngineStats(BaseModel):
    document_count: int
    cache: CacheStats | None = None


class _LocalOutcome:
    """What the local tiers produced for one query."""

    def __init__(self) -> None:
        self.match: MatchResult | None = None
        self.best_below: MatchResult | None = None
        self.candidates: list[Document] = []
        self.has_data = False

    def consider(self, result: MatchResult | None, min_confidence: float) -> bool:
        """Record a tier result; True if it ends the cascade."""
        if result is None:
            return False
        if result.confidence >= min_confidence:
            self.match = result
            return True
        if self.best_below is None or result.confidence > self.best_below.confidence:
            self.best_below = result
        return False


class MatchingEngine:
    """Orchestrates the matching cascade over an injected store, cache and remote."""

    def __init__(
        self,
        store: BaseDocumentStore,
        cache: QueryCache | None = None,
        remote: BaseRemoteGenerator | None = None,
        settings: Settings | None = None,
    ):
        self._settings = settings or load_settings()
        self._store = store
        self._cache = cache
        self._remote = remote
        self._extra_remotes: dict[str, BaseRemoteGenerator] = {}

    @property
    def store(self) -> BaseDocumentStore:
        return self._store

    @property
    def cache(self) -> QueryCache | None:
        return self._cache

    # --- Query path ---

    async def find_answer(
        self,
        query: object,
        options: PipelineOptions | None = None,
    ) -> FindAnswerResult:
        """Answer `query` from the local collection, or remotely as a last resort.

        Args:
            query: Raw user question.
            options: Per-call options. Defaults come from settings.

        Returns:
            FindAnswerResult. Store failures come back as a failed result
            carrying the error kind, unexpected ones as `UNKNOWN`; remote
            failures and remote deadlines as a no-match report.

        Raises:
            QueryEmptyError: Query missing or shorter than the minimum length.
            QueryTooLongError: Query longer than the maximum length.
        """
        t0 = time.perf_counter()
        opts = options or PipelineOptions.from_settings(self._settings)
        fingerprint = query_fingerprint(query)  # type: ignore[arg-type]

        with query_context(fingerprint):
            set_stage("validate")
            self.validate_query(query)
            query = cast(str, query)

            key = cache_key(query)
            if opts.use_cache and self._cache is not None:
                set_stage("cache")
                cached = self._cache.get(key)
                if cached is not None:
                    logger.info("Cache hit (tier %d)", cached.tier)
                    return cached.model_copy(
                        update={"cached": True, "processing_time_ms": _elapsed_ms(t0)}
                    )

            set_stage("preprocess")
            normalized = normalize_for_matching(query)
            keywords = extract_keywords(query)
            logger.debug("Query normalized, %d keywords", len(keywords))

            try:
                local = await self._run_local_tiers(normalized, keywords, opts)
            except Exception as e:
                log_error(e, "store", fingerprint)
                info = ErrorInfo.from_exception(e)
                return FindAnswerResult(
                    success=False,
                    tier=int(Tier.NONE),
                    message=info.message,
                    error=info,
                    processing_time_ms=_elapsed_ms(t0),
                )

            if local.match is not None:
                result = FindAnswerResult(
                    success=True,
                    match=local.match,
                    tier=local.match.tier_metadata.tier,
                )
            else:
                result = await self._fallback(query, keywords, local, opts, fingerprint)

            result = result.model_copy(update={"processing_time_ms": _elapsed_ms(t0)})

            if result.success and opts.use_cache and self._cache is not None:
                self._cache.set(key, result)

            set_stage(None)
            logger.info(
                "Query finished: success=%s tier=%d in %.1f ms",
                result.success, result.tier, result.processing_time_ms,
            )
            return result

    def validate_query(self, query: object) -> str:
        """Return the trimmed query, or raise a QueryValidationError."""
        if not isinstance(query, str) or not query.strip():
            raise QueryEmptyError("Query is empty or invalid")

        trimmed = query.strip()
        min_length = self._settings.min_query_length
        max_length = self._settings.max_query_length

        if len(trimmed) < min_length:
            raise QueryEmptyError(
                "Query is too short",
                details={"length": len(trimmed), "min_length": min_length},
            )
        if len(trimmed) > max_length:
            raise QueryTooLongError(
                "Query is too long",
                details={"length": len(trimmed), "max_length": max_length},
            )
        return trimmed

    # --- Collection management ---

    async def import_documents(self, documents: Sequence[Document]) -> int:
        """Write documents in batches and drop cached answers. Returns the count written."""
        batch_size = self._settings.import_batch_size
        written = 0
        for start in range(0, len(documents), batch_size):
            written += await self._store.add_batch(documents[start:start + batch_size])
        if self._cache is not None:
            self._cache.clear()
        logger.info("Imported %d documents", written)
        return written

    async def clear_documents(self) -> None:
        await self._store.clear()
        if self._cache is not None:
            self._cache.clear()

    async def stats(self) -> EngineStats:
        return EngineStats(
            document_count=await self._store.count(),
            cache=self._cache.stats() if self._cache is not None else None,
        )

    async def aclose(self) -> None:
        """Close remotes created for per-call endpoints."""
        for remote in self._extra_remotes.values():
            await remote.aclose()
        self._extra_remotes.clear()

    # --- Internals ---

    async def _run_local_tiers(
        self,
        normalized: str,
        keywords: list[Keyword],
        opts: PipelineOptions,
    ) -> _LocalOutcome:
        outcome = _LocalOutcome()
        outcome.has_data = await self._store.count() > 0
        if not outcome.has_data:
            logger.info("No local data loaded, skipping local tiers")
            return outcome

        for tier in LOCAL_TIERS:
            if tier is Tier.FUZZY and not opts.fuzzy_enabled:
                continue
            if tier is Tier.PARTIAL and not opts.partial_enabled:
                continue
            set_stage(tier.match_type)
            result = await self._match_tier(tier, normalized, keywords, outcome)
            if outcome.consider(result, opts.min_confidence):
                break
            if tier is Tier.KEYWORD and not outcome.candidates:
                logger.debug("No keyword candidates, falling back to the full collection")
                outcome.candidates = await self._store.get_all()

        return outcome

    async def _match_tier(
        self,
        tier: Tier,
        normalized: str,
        keywords: list[Keyword],
        outcome: _LocalOutcome,
    ) -> MatchResult | None:
        """Best match of one local tier. The keyword tier fills the candidate list."""
        if tier is Tier.EXACT:
            return await exact_match(normalized, self._store)
        if tier is Tier.KEYWORD:
            words = [kw.word for kw in keywords]
            outcome.candidates = await self._store.get_by_keywords(words) if words else []
            return keyword_match(keywords, outcome.candidates)
        if tier is Tier.FUZZY:
            return fuzzy_match(normalized, outcome.candidates)
        return partial_match(normalized, outcome.candidates)

    async def _fallback(
        self,
        query: str,
        keywords: list[Keyword],
        local: _LocalOutcome,
        opts: PipelineOptions,
        fingerprint: str,
    ) -> FindAnswerResult:
        """Remote tier, or a no-match report explaining why nothing was found."""
        remote = self._resolve_remote(opts) if opts.remote_enabled else None
        error: ErrorInfo | None = None

        if remote is not None:
            set_stage("remote")
            request = RemoteRequest(question=query, keywords=keywords, candidates=local.candidates)
            try:
                response = await self._generate_remote(remote, request, opts)
            except Exception as e:
                log_error(e, "remote", fingerprint)
                error = ErrorInfo.from_exception(e)
            else:
                if response.success and response.answer:
                    confidence = calculate_confidence("remote", response.confidence)
                    match = MatchResult(
                        document=None,
                        answer=response.answer,
                        reasoning=response.reasoning,
                        match_type="remote",
                        confidence=confidence,
                        raw_score=response.confidence,
                        explanation=explain_confidence("remote", confidence, response.confidence),
                        tier_metadata=TierMetadata(
                            tier=int(Tier.REMOTE),
                            method=Tier.REMOTE.method,
                            candidates_evaluated=len(local.candidates),
                        ),
                    )
                    return FindAnswerResult(
                        success=True,
                        match=match,
                        tier=int(Tier.REMOTE),
                        best_local_candidate=local.best_below,
                    )
                logger.info("Remote generator returned no answer")

        if not local.has_data:
            message = MSG_NO_DATA
        elif remote is None:
            message = MSG_REMOTE_DISABLED
        else:
            message = MSG_NO_MATCH
        if error is not None:
            message = f"{message} {user_message(error.kind)}"

        logger.info("No match found")
        return FindAnswerResult(
            success=False,
            tier=int(Tier.NONE),
            message=message,
            error=error,
            best_local_candidate=local.best_below,
        )

    async def _generate_remote(
        self,
        remote: BaseRemoteGenerator,
        request: RemoteRequest,
        opts: PipelineOptions,
    ) -> RemoteResponse:
        deadline = opts.remote_timeout_s or self._settings.remote_deadline_seconds
        try:
            return await asyncio.wait_for(remote.generate(request), timeout=deadline)
        except asyncio.TimeoutError as e:
            raise RemoteTimeoutError(
                f"Remote fallback exceeded {deadline}s",
                details={"timeout_s": deadline},
            ) from e

    def _resolve_remote(self, opts: PipelineOptions) -> BaseRemoteGenerator | None:
        endpoint = opts.remote_endpoint
        if not endpoint or (self._remote is not None and self._remote.endpoint == endpoint):
            return self._remote
        if endpoint not in self._extra_remotes:
            remote = create_remote_generator(self._settings, endpoint)
            if remote is None:
                return self._remote
            self._extra_remotes[endpoint] = remote
        return self._extra_remotes[endpoint]


def _elapsed_ms(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 3)
