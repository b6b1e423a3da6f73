# tests/unit/ingestion/test_unit_txt_parser.py
"""Tests for the alternating-lines text parser."""

from __future__ import annotations

import pytest

from answerfinder.core.errors import FileEncodingError
from answerfinder.ingestion.base_parser import MAX_QUESTION_LENGTH
from answerfinder.ingestion.txt_parser import TxtParser


@pytest.fixture
def parser() -> TxtParser:
    return TxtParser()


class TestTxtParser:
    def test_metadata(self, parser):
        assert parser.supported_extensions == [".txt"]
        assert parser.format_name == "txt"

    def test_pairs(self, parser):
        content = "What is the capital of France?\nParis\n\nWho wrote Hamlet?\nShakespeare\n"
        result = parser.parse(content, "quiz.txt")

        assert [d.original.answer for d in result.documents] == ["Paris", "Shakespeare"]
        assert [d.original.line_number for d in result.documents] == [1, 4]
        assert all(d.original.file_name == "quiz.txt" for d in result.documents)
        assert result.issues == []
        assert result.metadata.total_questions == 2
        assert result.metadata.format == "txt"

    def test_documents_are_processed(self, parser):
        doc = parser.parse("What is the capital of France?\nParis", "q.txt").documents[0]
        assert doc.processed.normalized_question == "what is the capital of france"
        assert doc.processed.keywords

    def test_blank_lines_between_question_and_answer(self, parser):
        result = parser.parse("Question one here\n\n\nAnswer one\n", "q.txt")
        assert len(result.documents) == 1
        assert result.documents[0].original.answer == "Answer one"

    def test_crlf_and_bom(self, parser):
        result = parser.parse("\ufeffWhat is two plus two?\r\nFour\r\n", "q.txt")
        assert result.documents[0].original.question == "What is two plus two?"
        assert result.documents[0].original.answer == "Four"

    @pytest.mark.parametrize("content", ["", "\n\n", "   \n  "])
    def test_empty_file(self, parser, content):
        result = parser.parse(content, "empty.txt")
        assert result.documents == []
        assert [i.type for i in result.issues] == ["empty_file"]

    def test_odd_line_count_warns_and_reports_missing_answer(self, parser):
        result = parser.parse("Question one?\nAnswer one\nDangling question?\n", "q.txt")
        types = [i.type for i in result.issues]
        assert types == ["structure_warning", "missing_answer"]
        assert result.issues[1].line == 3
        assert len(result.documents) == 1

    def test_too_short_question_skipped(self, parser):
        result = parser.parse("Hi\nHello\nWhat is water?\nH2O\n", "q.txt")
        assert [d.original.answer for d in result.documents] == ["H2O"]
        assert result.issues[0].type == "too_short"
        assert result.issues[0].line == 1

    def test_overlong_question_truncated(self, parser):
        long_question = "why " * (MAX_QUESTION_LENGTH // 2)
        result = parser.parse(f"{long_question}\nBecause\n", "q.txt")
        assert result.issues[0].type == "truncated"
        assert len(result.documents[0].original.question) == MAX_QUESTION_LENGTH

    def test_replacement_character_rejected(self, parser):
        with pytest.raises(FileEncodingError):
            parser.parse("Caf\ufffd question?\nAnswer\n", "q.txt")
