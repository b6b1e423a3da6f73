# src/ingestion/txt_parser.py
"""Plain text Q&A parser.

Format: a question line followed by its answer line, pairs separated by
blank lines. Blank lines between a question and its answer are tolerated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from answerfinder.core.models import Document
from answerfinder.ingestion.base_parser import (
    MAX_ANSWER_LENGTH,
    MAX_QUESTION_LENGTH,
    MIN_QUESTION_LENGTH,
    BaseParser,
)
from answerfinder.ingestion.document_builder import build_document
from answerfinder.ingestion.models import ParseIssue, ParseResult
from answerfinder.ingestion.validation import (
    normalize_line_endings,
    remove_bom,
    validate_encoding,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Pair:
    question: str
    answer: str
    line_number: int


class TxtParser(BaseParser):
    """Parser for alternating question/answer lines (.txt)."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".txt"]

    @property
    def format_name(self) -> str:
        return "txt"

    def parse(self, content: str, file_name: str) -> ParseResult:
        text = normalize_line_endings(remove_bom(content))
        validate_encoding(text)
        lines = text.split("\n")

        issues = self._check_structure(lines)
        if issues and issues[0].type == "empty_file":
            return self._result([], issues, file_name, content)

        pairs = self._extract_pairs(lines, issues)

        documents: list[Document] = []
        for pair in pairs:
            try:
                documents.append(
                    build_document(pair.question, pair.answer, pair.line_number, file_name)
                )
            except ValueError as e:
                issues.append(ParseIssue(
                    line=pair.line_number,
                    type="parse_error",
                    message=str(e),
                    question=pair.question[:100],
                ))

        logger.info(
            "Parsed %s: %d questions, %d issues", file_name, len(documents), len(issues)
        )
        return self._result(documents, issues, file_name, content)

    @staticmethod
    def _check_structure(lines: list[str]) -> list[ParseIssue]:
        non_empty = sum(1 for line in lines if line.strip())
        if non_empty == 0:
            return [ParseIssue(line=0, type="empty_file", message="File is empty")]
        if non_empty % 2 != 0:
            return [ParseIssue(
                line=0,
                type="structure_warning",
                message=(
                    f"File has {non_empty} non-empty lines. "
                    "Expected pairs of questions and answers."
                ),
            )]
        return []

    @staticmethod
    def _extract_pairs(lines: list[str], issues: list[ParseIssue]) -> list[_Pair]:
        pairs: list[_Pair] = []
        i = 0
        total = len(lines)

        while i < total:
            while i < total and not lines[i].strip():
                i += 1
            if i >= total:
                break

            line_number = i + 1
            question = lines[i].strip()
            i += 1

            while i < total and not lines[i].strip():
                i += 1
            if i >= total:
                issues.append(ParseIssue(
                    line=line_number,
                    type="missing_answer",
                    message=f"Question at line {line_number} has no answer",
                    question=question[:100],
                ))
                break

            answer = lines[i].strip()
            i += 1

            if len(question) < MIN_QUESTION_LENGTH:
                issues.append(ParseIssue(
                    line=line_number,
                    type="too_short",
                    message=f"Question at line {line_number} is too short ({len(question)} chars)",
                    question=question,
                ))
                continue

            if len(question) > MAX_QUESTION_LENGTH or len(answer) > MAX_ANSWER_LENGTH:
                issues.append(ParseIssue(
                    line=line_number,
                    type="truncated",
                    message=f"Pair at line {line_number} exceeds the length limit, truncating",
                    question=question[:100],
                ))

            pairs.append(_Pair(
                question=question[:MAX_QUESTION_LENGTH],
                answer=answer[:MAX_ANSWER_LENGTH],
                line_number=line_number,
            ))

        return pairs
