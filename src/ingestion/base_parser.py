# src/ingestion/base_parser.py
"""Abstract parser interface for Q&A file formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from answerfinder.core.models import Document
from answerfinder.ingestion.models import ParseIssue, ParseMetadata, ParseResult

MIN_QUESTION_LENGTH = 3
MAX_QUESTION_LENGTH = 5000
MAX_ANSWER_LENGTH = 50000


class BaseParser(ABC):
    """Unified interface for Q&A file parsers."""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this parser handles (e.g., ['.txt'])."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Short format identifier stored in ParseMetadata."""

    @abstractmethod
    def parse(self, content: str, file_name: str) -> ParseResult:
        """Parse decoded file content into documents plus per-item issues.

        Raises:
            IngestionError: The file as a whole cannot be parsed.
        """

    def _result(
        self,
        documents: list[Document],
        issues: list[ParseIssue],
        file_name: str,
        content: str,
    ) -> ParseResult:
        return ParseResult(
            documents=documents,
            issues=issues,
            metadata=ParseMetadata(
                file_name=file_name,
                format=self.format_name,
                total_questions=len(documents),
                total_issues=len(issues),
                file_size=len(content),
                parsed_at=datetime.now(timezone.utc),
            ),
        )
