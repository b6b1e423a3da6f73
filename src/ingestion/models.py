# src/ingestion/models.py
"""Parser output models: ParseResult, ParseMetadata, ParseIssue."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from answerfinder.core.models import Document

IssueType = Literal[
    "empty_file",
    "structure_warning",
    "invalid_item",
    "missing_answer",
    "too_short",
    "truncated",
    "parse_error",
]


class ParseIssue(BaseModel):
    """Problem found at one position of a source file. Parsing continues past it."""

    line: int = 0
    type: IssueType
    message: str
    question: str = ""


class ParseMetadata(BaseModel):
    file_name: str
    format: str
    total_questions: int = 0
    total_issues: int = 0
    file_size: int = 0
    parsed_at: datetime


class ParseResult(BaseModel):
    documents: list[Document] = Field(default_factory=list)
    metadata: ParseMetadata
    issues: list[ParseIssue] = Field(default_factory=list)
