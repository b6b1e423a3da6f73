# src/normalization/question_classifier.py
"""Question classifier: label the rhetorical type of a question.

Each type has a fixed list of structural patterns and a fixed keyword
list. Per-type confidence is 0.7 x pattern hit ratio + 0.3 x keyword hit
ratio; the best type wins, earlier types win ties.
"""

from __future__ import annotations

import re

from answerfinder.core.models import QuestionClassification, QuestionType

PATTERN_WEIGHT = 0.7
KEYWORD_WEIGHT = 0.3
MIN_CONFIDENCE = 0.1

_I = re.IGNORECASE

_MCQ_PATTERNS = [
    re.compile(r"which\s+of\s+the\s+following", _I),
    re.compile(r"select\s+the\s+correct", _I),
    re.compile(r"choose\s+the\s+correct", _I),
    re.compile(r"pick\s+the\s+correct", _I),
    re.compile(r"identify\s+the\s+correct", _I),
    re.compile(r"what\s+is\s+the\s+correct", _I),
    re.compile(r"multiple\s+choice", _I),
    re.compile(r"\b[a-d]\)|^\s*[a-d][.)]", _I | re.MULTILINE),
    re.compile(r"option\s*[a-d]", _I),
]
_MCQ_KEYWORDS = [
    "following", "options", "choices", "alternatives", "select", "choose", "pick",
]

_TRUE_FALSE_PATTERNS = [
    re.compile(r"true\s+or\s+false", _I),
    re.compile(r"is\s+it\s+true\s+that", _I),
    re.compile(r"is\s+this\s+statement\s+true", _I),
    re.compile(r"state\s+whether.*true\s+or\s+false", _I),
    re.compile(r"determine\s+if.*true\s+or\s+false", _I),
]
_TRUE_FALSE_KEYWORDS = ["true", "false", "correct", "incorrect", "right", "wrong"]

_FILL_BLANK_PATTERNS = [
    re.compile(r"_+"),
    re.compile(r"\[blank\]", _I),
    re.compile(r"\[___\]"),
    re.compile(r"fill\s+in\s+the\s+blank", _I),
    re.compile(r"complete\s+the\s+sentence", _I),
    re.compile(r"complete\s+the\s+following", _I),
]
_FILL_BLANK_KEYWORDS = ["fill", "blank", "complete", "missing"]

_SHORT_ANSWER_PATTERNS = [
    re.compile(r"^what\s+is", _I),
    re.compile(r"^what\s+are", _I),
    re.compile(r"^define", _I),
    re.compile(r"^list", _I),
    re.compile(r"^name", _I),
    re.compile(r"^identify", _I),
    re.compile(r"^state", _I),
    re.compile(r"^give", _I),
    re.compile(r"^mention", _I),
    re.compile(r"^write\s+the\s+name", _I),
    re.compile(r"in\s+one\s+word", _I),
    re.compile(r"in\s+brief", _I),
    re.compile(r"briefly", _I),
]
_SHORT_ANSWER_KEYWORDS = [
    "what", "define", "list", "name", "identify", "state", "mention", "briefly",
]

_ESSAY_PATTERNS = [
    re.compile(r"^explain", _I),
    re.compile(r"^describe", _I),
    re.compile(r"^discuss", _I),
    re.compile(r"^analyze", _I),
    re.compile(r"^analyse", _I),
    re.compile(r"^compare\s+and\s+contrast", _I),
    re.compile(r"^evaluate", _I),
    re.compile(r"^justify", _I),
    re.compile(r"^elaborate", _I),
    re.compile(r"^illustrate", _I),
    re.compile(r"in\s+detail", _I),
    re.compile(r"with\s+examples", _I),
    re.compile(r"write\s+an\s+essay", _I),
    re.compile(r"write\s+a\s+note", _I),
]
_ESSAY_KEYWORDS = [
    "explain", "describe", "discuss", "analyze", "analyse", "compare", "contrast",
    "evaluate", "justify", "elaborate", "illustrate", "detail", "essay",
]

# Evaluation order doubles as tie-break priority.
_RULES: list[tuple[QuestionType, list[re.Pattern[str]], list[str]]] = [
    ("mcq", _MCQ_PATTERNS, _MCQ_KEYWORDS),
    ("true_false", _TRUE_FALSE_PATTERNS, _TRUE_FALSE_KEYWORDS),
    ("fill_blank", _FILL_BLANK_PATTERNS, _FILL_BLANK_KEYWORDS),
    ("short_answer", _SHORT_ANSWER_PATTERNS, _SHORT_ANSWER_KEYWORDS),
    ("essay", _ESSAY_PATTERNS, _ESSAY_KEYWORDS),
]

_DISPLAY_NAMES: dict[str, str] = {
    "mcq": "Multiple Choice",
    "true_false": "True/False",
    "fill_blank": "Fill in the Blank",
    "short_answer": "Short Answer",
    "essay": "Essay/Long Answer",
    "unknown": "Unknown",
}


def classify_question(text: object) -> QuestionClassification:
    """Classify the rhetorical type of a question.

    Args:
        text: Question text. Non-str or blank input is `unknown`.

    Returns:
        QuestionClassification with the winning type and its confidence.
    """
    if not isinstance(text, str) or not text.strip():
        return QuestionClassification(type="unknown", confidence=0.0)

    q = text.strip()
    best_type: QuestionType = "unknown"
    best_confidence = 0.0

    for question_type, patterns, keywords in _RULES:
        confidence = _type_confidence(q, patterns, keywords)
        if confidence > best_confidence:
            best_type, best_confidence = question_type, confidence

    if best_confidence < MIN_CONFIDENCE:
        return QuestionClassification(type="unknown", confidence=0.0)
    return QuestionClassification(type=best_type, confidence=best_confidence)


def question_type_display_name(question_type: str) -> str:
    """Human-readable label; unrecognized types read as `Unknown`."""
    return _DISPLAY_NAMES.get(question_type, "Unknown")


def _type_confidence(
    q: str,
    patterns: list[re.Pattern[str]],
    keywords: list[str],
) -> float:
    """Weighted pattern and keyword hit ratios, capped at 1."""
    lowered = q.lower()
    pattern_hits = sum(1 for p in patterns if p.search(q))
    keyword_hits = sum(1 for k in keywords if k in lowered)

    pattern_score = pattern_hits / len(patterns) if patterns else 0.0
    keyword_score = keyword_hits / len(keywords) if keywords else 0.0
    return min(PATTERN_WEIGHT * pattern_score + KEYWORD_WEIGHT * keyword_score, 1.0)
