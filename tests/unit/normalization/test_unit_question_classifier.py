# tests/unit/normalization/test_unit_question_classifier.py
"""Tests for rhetorical question classification."""

from __future__ import annotations

import pytest

from answerfinder.normalization.question_classifier import (
    classify_question,
    question_type_display_name,
)


class TestClassifyQuestion:
    def test_multiple_choice(self):
        result = classify_question("Which of the following is a prime number? a) 4 b) 5")
        assert result.type == "mcq"
        assert 0.1 <= result.confidence <= 1.0

    def test_true_false(self):
        assert classify_question("True or false: the sun is a star").type == "true_false"

    def test_fill_blank(self):
        assert classify_question("The capital of France is ____").type == "fill_blank"

    def test_short_answer(self):
        assert classify_question("Define photosynthesis briefly").type == "short_answer"

    def test_essay(self):
        assert classify_question("Explain in detail how photosynthesis works").type == "essay"

    def test_weak_signal_is_unknown(self):
        result = classify_question("hello there")
        assert result.type == "unknown"
        assert result.confidence == 0.0

    @pytest.mark.parametrize("value", ["", "   ", None, 3])
    def test_invalid_input(self, value):
        result = classify_question(value)
        assert result.type == "unknown"
        assert result.confidence == 0.0

    def test_deterministic(self):
        text = "Which of the following is correct? a) yes b) no"
        assert classify_question(text) == classify_question(text)


class TestDisplayName:
    @pytest.mark.parametrize(
        "qtype, label",
        [
            ("mcq", "Multiple Choice"),
            ("true_false", "True/False"),
            ("fill_blank", "Fill in the Blank"),
            ("short_answer", "Short Answer"),
            ("essay", "Essay/Long Answer"),
            ("unknown", "Unknown"),
            ("whatever", "Unknown"),
        ],
    )
    def test_labels(self, qtype, label):
        assert question_type_display_name(qtype) == label
