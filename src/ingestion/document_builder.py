# src/ingestion/document_builder.py
"""Turn a raw question/answer pair into a fully processed Document."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from answerfinder.core.hashing import document_id
from answerfinder.core.models import Document, DocumentTimestamps, OriginalQA, ProcessedQuestion
from answerfinder.normalization.keyword_extractor import extract_keywords
from answerfinder.normalization.question_classifier import classify_question
from answerfinder.normalization.text_normalizer import normalize_for_matching

_DIGIT_RE = re.compile(r"\d")
_DATE_RE = re.compile(
    r"\b(january|february|march|april|may|june|july|august|september|october|"
    r"november|december|\d{4}|\d{1,2}/\d{1,2}/\d{2,4})\b",
    re.IGNORECASE,
)


def has_numbers(text: str) -> bool:
    return bool(_DIGIT_RE.search(text))


def has_dates(text: str) -> bool:
    """Month names, four-digit years or d/m/y style dates."""
    return bool(_DATE_RE.search(text))


def build_document(
    question: str,
    answer: str,
    line_number: int = 0,
    file_name: str = "",
    now: datetime | None = None,
) -> Document:
    """Normalize, extract keywords, classify and hash one Q&A pair.

    The id depends only on the normalized question and the source position,
    so rebuilding the same pair always yields the same id.
    """
    normalized = normalize_for_matching(question)
    classification = classify_question(question)
    timestamp = now or datetime.now(timezone.utc)

    return Document(
        id=document_id(normalized, line_number, file_name),
        original=OriginalQA(
            question=question,
            answer=answer,
            line_number=line_number,
            file_name=file_name,
        ),
        processed=ProcessedQuestion(
            normalized_question=normalized,
            keywords=extract_keywords(question),
            question_type=classification.type,
            question_type_confidence=classification.confidence,
            character_count=len(question),
            word_count=len(question.split()),
            has_numbers=has_numbers(question),
            has_dates=has_dates(question),
        ),
        metadata=DocumentTimestamps(created_at=timestamp, updated_at=timestamp),
    )
