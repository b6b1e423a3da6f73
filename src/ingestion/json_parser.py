# src/ingestion/json_parser.py
"""JSON Q&A parser: a top-level array of {"question", "answer"} objects."""

from __future__ import annotations

import json
import logging
from typing import Any

from answerfinder.core.errors import FileInvalidFormatError
from answerfinder.core.models import Document
from answerfinder.ingestion.base_parser import MAX_ANSWER_LENGTH, MAX_QUESTION_LENGTH, BaseParser
from answerfinder.ingestion.document_builder import build_document
from answerfinder.ingestion.models import ParseIssue, ParseResult
from answerfinder.ingestion.validation import remove_bom

logger = logging.getLogger(__name__)


class JsonParser(BaseParser):
    """Parser for JSON arrays of question/answer objects (.json)."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".json"]

    @property
    def format_name(self) -> str:
        return "json"

    def parse(self, content: str, file_name: str) -> ParseResult:
        try:
            data: Any = json.loads(remove_bom(content))
        except json.JSONDecodeError as e:
            raise FileInvalidFormatError(
                "Invalid JSON format",
                details={"reason": f"Invalid JSON syntax: {e.msg} (line {e.lineno})"},
            ) from e

        if not isinstance(data, list):
            raise FileInvalidFormatError(
                "JSON root must be an array",
                details={"reason": "JSON root must be an array of objects."},
            )

        documents: list[Document] = []
        issues: list[ParseIssue] = []
        for index, item in enumerate(data, start=1):
            question = item.get("question") if isinstance(item, dict) else None
            answer = item.get("answer") if isinstance(item, dict) else None
            if not isinstance(question, str) or not isinstance(answer, str):
                issues.append(ParseIssue(
                    line=index,
                    type="invalid_item",
                    message='Item missing required "question" or "answer" string fields',
                    question=str(question)[:50] if question is not None else "unknown",
                ))
                continue

            question, answer = question.strip(), answer.strip()
            if not question or not answer:
                continue

            try:
                documents.append(build_document(
                    question[:MAX_QUESTION_LENGTH],
                    answer[:MAX_ANSWER_LENGTH],
                    index,
                    file_name,
                ))
            except ValueError as e:
                issues.append(ParseIssue(
                    line=index, type="parse_error", message=str(e), question=question[:100],
                ))

        logger.info(
            "Parsed %s: %d questions, %d issues", file_name, len(documents), len(issues)
        )
        return self._result(documents, issues, file_name, content)
