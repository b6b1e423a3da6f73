# src/remote/prompt_builder.py
"""Prompt construction and response parsing for the remote generator.

The prompt template depends on the shape of the query (single word,
multiple-choice block, question, short phrase). Every template asks for
an `Answer:` line followed by a `Reasoning:` line, which
parse_remote_response() splits back apart.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Literal

from answerfinder.core.models import Document

SelectionKind = Literal["SINGLE_WORD", "MCQ", "QUESTION", "PHRASE", "DEFAULT"]

MAX_CONTEXT_CANDIDATES = 3
PHRASE_MAX_WORDS = 5

_MCQ_PAREN_RE = re.compile(r"\b[A-Da-d]\)[^A-Da-d]*\b[A-Da-d]\)")
_MCQ_DOT_RE = re.compile(r"\b[A-Da-d]\.[^A-Da-d]*\b[A-Da-d]\.")
_QUESTION_START_RE = re.compile(
    r"^(what|who|where|when|why|how|which|is|are|do|does|can)\b", re.IGNORECASE
)
_ANSWER_RE = re.compile(r"Answer:\s*([\s\S]+?)(?=\n?Reasoning:|$)", re.IGNORECASE)
_REASONING_RE = re.compile(r"Reasoning:\s*([\s\S]+)", re.IGNORECASE)

_TEMPLATES: dict[SelectionKind, str] = {
    "SINGLE_WORD": (
        'Define: "{text}"\n\n'
        "Constraints:\n"
        "- Keep it very short (max 2 sentences).\n\n"
        "Answer format:\n"
        "Answer: [Concise Definition]\n"
        "Reasoning: [Brief Context]\n"
    ),
    "PHRASE": (
        'Explain: "{text}"\n\n'
        "Constraints:\n"
        "- Max 3 lines total.\n"
        "- Be direct.\n\n"
        "Answer format:\n"
        "Answer: [Concise Explanation]\n"
        "Reasoning: [Key Characteristics]\n"
    ),
    "QUESTION": (
        'Question: "{text}"\n\n'
        "Constraints:\n"
        "- Provide a direct, short answer (max 2 sentences).\n"
        "- Reasoning should be 1-2 bullet points.\n"
        "- STRICT LIMIT: Total output must be under 4 lines.\n\n"
        "Answer format:\n"
        "Answer: [Direct Answer]\n"
        "Reasoning: [Brief Justification]\n"
    ),
    "MCQ": (
        "Question: {text}\n\n"
        "Task: Pick the correct option.\n\n"
        "Constraints:\n"
        "- Answer must be just the option.\n"
        "- Reasoning must be very brief.\n\n"
        "Answer format:\n"
        "Answer: [Correct Option]\n"
        "Reasoning: [Why it's correct]\n"
    ),
    "DEFAULT": (
        'Input: "{text}"\n\n'
        "Constraints:\n"
        "- strict limit: 4 lines max.\n"
        "- Be direct and concise.\n\n"
        "Answer format:\n"
        "Answer: [Concise Answer]\n"
        "Reasoning: [Brief Context]\n"
    ),
}


def classify_selection(text: str | None) -> SelectionKind:
    """Pick the prompt template for a piece of user text."""
    if not text or not text.strip():
        return "DEFAULT"

    normalized = text.strip()
    words = normalized.split()

    if len(words) == 1:
        return "SINGLE_WORD"
    if _MCQ_PAREN_RE.search(normalized) or _MCQ_DOT_RE.search(normalized):
        return "MCQ"
    if _QUESTION_START_RE.search(normalized) or normalized.endswith("?"):
        return "QUESTION"
    if len(words) <= PHRASE_MAX_WORDS:
        return "PHRASE"
    return "DEFAULT"


def build_prompt(text: str, candidates: Sequence[Document] = ()) -> str:
    """Render the prompt for `text`, with up to three related local Q&A pairs as context."""
    prompt = _TEMPLATES[classify_selection(text)].format(text=text.strip())
    context = list(candidates)[:MAX_CONTEXT_CANDIDATES]
    if context:
        lines = [f"- Q: {doc.original.question} A: {doc.original.answer}" for doc in context]
        prompt += "\nRelated questions:\n" + "\n".join(lines) + "\n"
    return prompt


def parse_remote_response(raw: str | None) -> tuple[str, str]:
    """Split generated text into (answer, reasoning).

    Unlabelled text is returned whole as the answer.
    """
    if not raw:
        return "", ""

    answer_match = _ANSWER_RE.search(raw)
    if answer_match:
        reasoning_match = _REASONING_RE.search(raw)
        reasoning = reasoning_match.group(1).strip() if reasoning_match else ""
        return answer_match.group(1).strip(), reasoning

    return raw.strip(), ""
