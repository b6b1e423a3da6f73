# src/normalization/text_normalizer.py
"""Multi-stage text normalization.

Stages run in a fixed order and each one is idempotent:
  1. characters: Unicode NFKC, typographic quotes/dashes/ellipsis folding,
     whitespace variants, zero-width characters
  2. punctuation: strip edges, drop sentence punctuation and symbols while
     keeping technical markers (@ # $ %) and in-word hyphens/apostrophes
  3. transformation: contractions, number words, lowercasing
  4. structure: whitespace collapse and trim

normalize_for_matching() and normalize_for_keywords() are the two presets
used throughout the package.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

_SINGLE_QUOTES_RE = re.compile(r"[\u2018\u2019\u201A\u201B\u2032]")
_DOUBLE_QUOTES_RE = re.compile(r"[\u201C\u201D\u201E\u201F\u2033]")
_DASHES_RE = re.compile(r"[\u2012\u2013\u2014\u2015\u2212]")
_WHITESPACE_VARIANTS_RE = re.compile(r"[\u00A0\u1680\u2000-\u200A\u202F\u205F\u3000]")
_ZERO_WIDTH_RE = re.compile(r"[\u200B-\u200D\u2060\uFEFF]")

_EDGE_RE = re.compile(r"^[\W_]+|[\W_]+$")
_SENTENCE_PUNCT_RE = re.compile(r"[.,;:]")
_QUESTION_PUNCT_RE = re.compile(r"[?!]")
_QUOTES_RE = re.compile(r"[\"`]")
_BRACKETS_RE = re.compile(r"[(){}\[\]]")
_SYMBOLS_RE = re.compile(r"[<>|\\/~^*+=_]")
_ISOLATED_HYPHEN_RE = re.compile(r"(?:(?<=\s)|^)-+|-+(?=\s|$)")
_LOOSE_APOSTROPHE_RE = re.compile(r"(?<!\w)'+|'+(?!\w)")
_APOSTROPHE_RE = re.compile(r"'")
_WHITESPACE_RE = re.compile(r"\s+")

CONTRACTIONS: dict[str, str] = {
    "don't": "do not",
    "doesn't": "does not",
    "didn't": "did not",
    "won't": "will not",
    "wouldn't": "would not",
    "can't": "cannot",
    "couldn't": "could not",
    "shouldn't": "should not",
    "isn't": "is not",
    "aren't": "are not",
    "wasn't": "was not",
    "weren't": "were not",
    "haven't": "have not",
    "hasn't": "has not",
    "hadn't": "had not",
    "i'm": "i am",
    "you're": "you are",
    "he's": "he is",
    "she's": "she is",
    "it's": "it is",
    "we're": "we are",
    "they're": "they are",
    "i've": "i have",
    "you've": "you have",
    "we've": "we have",
    "they've": "they have",
    "i'll": "i will",
    "you'll": "you will",
    "he'll": "he will",
    "she'll": "she will",
    "we'll": "we will",
    "they'll": "they will",
    "i'd": "i would",
    "you'd": "you would",
    "he'd": "he would",
    "she'd": "she would",
    "we'd": "we would",
    "they'd": "they would",
}

NUMBER_WORDS: dict[str, str] = {
    "zero": "0", "one": "1", "two": "2", "three": "3", "four": "4",
    "five": "5", "six": "6", "seven": "7", "eight": "8", "nine": "9",
    "ten": "10", "eleven": "11", "twelve": "12", "thirteen": "13",
    "fourteen": "14", "fifteen": "15", "sixteen": "16", "seventeen": "17",
    "eighteen": "18", "nineteen": "19", "twenty": "20", "thirty": "30",
    "forty": "40", "fifty": "50", "sixty": "60", "seventy": "70",
    "eighty": "80", "ninety": "90", "hundred": "100", "thousand": "1000",
}

_CONTRACTIONS_RE = re.compile(
    r"\b(" + "|".join(re.escape(c) for c in CONTRACTIONS) + r")\b",
    re.IGNORECASE,
)
_NUMBER_WORDS_RE = re.compile(
    r"\b(" + "|".join(NUMBER_WORDS) + r")\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class NormalizeOptions:
    """Switches for the transformation stages."""

    lowercase: bool = True
    expand_contractions: bool = True
    normalize_numbers: bool = False
    preserve_question_marks: bool = False


MATCHING_OPTIONS = NormalizeOptions(
    lowercase=True,
    expand_contractions=True,
    normalize_numbers=False,
    preserve_question_marks=False,
)

KEYWORD_OPTIONS = NormalizeOptions(
    lowercase=True,
    expand_contractions=False,
    normalize_numbers=False,
    preserve_question_marks=False,
)


def normalize(text: object, options: NormalizeOptions | None = None) -> str:
    """Run the full normalization pipeline.

    Args:
        text: Raw text. Anything that is not a non-empty str yields "".
        options: Stage switches. Defaults to NormalizeOptions().

    Returns:
        Normalized text. normalize(normalize(x)) == normalize(x).
    """
    if not isinstance(text, str) or not text:
        return ""
    opts = options or NormalizeOptions()

    text = normalize_characters(text)
    text = normalize_punctuation(text, preserve_question_marks=opts.preserve_question_marks)
    text = transform_text(
        text,
        lowercase=opts.lowercase,
        expand_contractions=opts.expand_contractions,
        normalize_numbers=opts.normalize_numbers,
    )
    return normalize_structure(text)


def normalize_for_matching(text: object) -> str:
    """Aggressive preset used for exact, fuzzy and partial comparison."""
    return normalize(text, MATCHING_OPTIONS)


def normalize_for_keywords(text: object) -> str:
    """Preset for keyword extraction; contractions survive as single tokens."""
    return normalize(text, KEYWORD_OPTIONS)


# --- Stages ---


def normalize_characters(text: str) -> str:
    """Stage 1: fold Unicode variants onto plain ASCII punctuation."""
    text = unicodedata.normalize("NFKC", text)
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _DASHES_RE.sub("-", text)
    text = text.replace("\u2026", "...")
    text = _ZERO_WIDTH_RE.sub("", text)
    return _WHITESPACE_VARIANTS_RE.sub(" ", text)


def normalize_punctuation(text: str, preserve_question_marks: bool = False) -> str:
    """Stage 2: remove punctuation and symbols.

    `@ # $ %` are kept for technical terms. Hyphens survive only inside
    words; apostrophes only inside words, so contractions reach stage 3.
    """
    text = _EDGE_RE.sub("", text)
    text = _SENTENCE_PUNCT_RE.sub(" ", text)
    if not preserve_question_marks:
        text = _QUESTION_PUNCT_RE.sub(" ", text)
    text = _QUOTES_RE.sub("", text)
    text = _BRACKETS_RE.sub(" ", text)
    text = _SYMBOLS_RE.sub(" ", text)
    text = _LOOSE_APOSTROPHE_RE.sub(" ", text)
    return _ISOLATED_HYPHEN_RE.sub(" ", text)


def transform_text(
    text: str,
    lowercase: bool = True,
    expand_contractions: bool = True,
    normalize_numbers: bool = False,
) -> str:
    """Stage 3: contractions, number words, case."""
    if expand_contractions:
        text = _CONTRACTIONS_RE.sub(lambda m: CONTRACTIONS[m.group(0).lower()], text)
    text = _APOSTROPHE_RE.sub("", text)

    if normalize_numbers:
        text = _NUMBER_WORDS_RE.sub(lambda m: NUMBER_WORDS[m.group(0).lower()], text)

    if lowercase:
        text = text.lower()
    return text


def normalize_structure(text: str) -> str:
    """Stage 4: collapse whitespace runs and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()
