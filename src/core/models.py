# src/core/models.py
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

from answerfinder.core.errors import ErrorInfo

if TYPE_CHECKING:
    from answerfinder.config.settings import Settings

KeywordType = Literal["entity", "technical", "common", "stopword"]
QuestionType = Literal[
    "mcq", "true_false", "fill_blank", "short_answer", "essay", "unknown"
]
MatchType = Literal["exact", "keyword", "fuzzy", "partial", "remote"]


# === KEYWORDS & CLASSIFICATION ===


class Keyword(BaseModel):
    """Single extracted keyword or phrase with its importance in the source text."""

    model_config = ConfigDict(frozen=True)

    word: str
    importance: float = Field(ge=0.0, le=1.0)
    type: KeywordType = "common"


class QuestionClassification(BaseModel):
    """Rhetorical question type with the winning type's score."""

    type: QuestionType = "unknown"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


# === DOCUMENT MODELS ===


class OriginalQA(BaseModel):
    """Question/answer pair exactly as read from its source."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    line_number: int = 0
    file_name: str = ""


class ProcessedQuestion(BaseModel):
    """Derived, comparison-ready form of a stored question."""

    model_config = ConfigDict(frozen=True)

    normalized_question: str
    keywords: list[Keyword] = Field(default_factory=list)
    question_type: QuestionType = "unknown"
    question_type_confidence: float = 0.0
    character_count: int = 0
    word_count: int = 0
    has_numbers: bool = False
    has_dates: bool = False


class DocumentTimestamps(BaseModel):
    model_config = ConfigDict(frozen=True)

    created_at: datetime
    updated_at: datetime


class Document(BaseModel):
    """Stored question/answer pair. Immutable once built.

    `id` is derived from normalized question, line number and file name, so
    re-importing identical content yields the same identity.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    original: OriginalQA
    processed: ProcessedQuestion
    metadata: DocumentTimestamps

    @property
    def keyword_words(self) -> list[str]:
        """Keyword strings in stored (importance) order."""
        return [kw.word for kw in self.processed.keywords]


# === MATCHING ===


class TierMetadata(BaseModel):
    """Diagnostics about the tier that produced a match."""

    tier: int = Field(ge=1, le=5)
    method: str
    candidates_evaluated: int = 0
    matched_keywords: list[str] = Field(default_factory=list)


class MatchResult(BaseModel):
    """Best match produced by a single tier.

    `document` is None only for remote matches, which carry their answer
    in `answer`/`reasoning` directly.
    """

    document: Document | None = None
    answer: str = ""
    reasoning: str = ""
    match_type: MatchType
    confidence: float = Field(ge=0.0, le=1.0)
    raw_score: float = Field(ge=0.0, le=1.0)
    explanation: str = ""
    tier_metadata: TierMetadata


class PipelineOptions(BaseModel):
    """Per-call matching options. Not persisted."""

    min_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    fuzzy_enabled: bool = True
    partial_enabled: bool = True
    use_cache: bool = True
    remote_enabled: bool = False
    remote_endpoint: str = ""
    remote_timeout_s: float | None = Field(default=None, gt=0.0)

    @classmethod
    def from_settings(cls, settings: Settings) -> PipelineOptions:
        """Default options taken from application settings."""
        return cls(
            min_confidence=settings.min_confidence,
            fuzzy_enabled=settings.fuzzy_enabled,
            partial_enabled=settings.partial_enabled,
            use_cache=settings.use_cache,
            remote_enabled=settings.remote_enabled,
            remote_endpoint=settings.remote_endpoint,
            remote_timeout_s=settings.remote_deadline_seconds,
        )


class FindAnswerResult(BaseModel):
    """Caller-facing outcome of a single find_answer call."""

    success: bool
    match: MatchResult | None = None
    tier: int = Field(default=0, ge=0, le=5)
    message: str | None = None
    processing_time_ms: float = 0.0
    cached: bool = False
    error: ErrorInfo | None = None
    best_local_candidate: MatchResult | None = None

    @property
    def answer(self) -> str | None:
        """Answer text of the match, if any."""
        return self.match.answer if self.match is not None else None


# === REMOTE FALLBACK ===


class RemoteRequest(BaseModel):
    """Payload handed to the remote answer generator."""

    question: str
    keywords: list[Keyword] = Field(default_factory=list)
    candidates: list[Document] = Field(default_factory=list)


class RemoteResponse(BaseModel):
    """Answer produced by the remote generator."""

    success: bool
    answer: str = ""
    reasoning: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
