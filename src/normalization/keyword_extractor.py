# src/normalization/keyword_extractor.py
"""Keyword extraction with local importance scoring and phrase detection.

Importance is a term-frequency x rarity score computed within the input
text only, scaled so that the best-scoring token of the text gets 1.0.
Single tokens and 2/3-token phrases compete in one ranked list.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from collections.abc import Iterable

from answerfinder.core.models import Keyword, KeywordType
from answerfinder.normalization.stopwords import is_stopword
from answerfinder.normalization.text_normalizer import normalize_for_keywords

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 50
MIN_KEYWORD_LENGTH = 3
MAX_KEYWORD_LENGTH = 50
IMPORTANCE_THRESHOLD = 0.1
PHRASE_BOOST = 1.5
PHRASE_SIZES = (2, 3)

DATE_WORDS: frozenset[str] = frozenset({
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    "today", "tomorrow", "yesterday", "year", "month", "week", "day",
})

_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
_ORDINAL_RE = re.compile(r"^\d+(st|nd|rd|th)$")
_TECHNICAL_CHARS_RE = re.compile(r"[\d\-@#$%]")
_CASE_SHIFT_RE = re.compile(r"[a-z][A-Z]")
_FRAGMENT_SPLIT_RE = re.compile(r"[^\w@#$%'\-]+")
_SENTENCE_END_RE = re.compile(r"[.!?][\"')\]]*$")


def is_number(word: str) -> bool:
    """Plain integers, decimals and ordinals such as `21st`."""
    return bool(_NUMBER_RE.match(word) or _ORDINAL_RE.match(word))


def is_date_word(word: str) -> bool:
    return word.lower() in DATE_WORDS


def is_technical_term(original_word: str) -> bool:
    """Digits or `-@#$%`, an all-caps acronym, or an internal case shift."""
    if _TECHNICAL_CHARS_RE.search(original_word):
        return True
    if len(original_word) > 1 and original_word.isupper():
        return True
    return bool(_CASE_SHIFT_RE.search(original_word))


def extract_keywords(
    text: object,
    max_keywords: int = MAX_KEYWORDS,
    include_phrases: bool = True,
    stopwords: Iterable[str] | None = None,
) -> list[Keyword]:
    """Extract ranked keywords from free text.

    Args:
        text: Raw text. Non-str or empty input yields an empty list.
        max_keywords: Cap on the returned list.
        include_phrases: Also emit contiguous 2- and 3-token phrases.
        stopwords: Replacement stop-word set. The protected question words
            and qualifiers are kept regardless.

    Returns:
        Keywords sorted by importance descending, unique on `word`.
    """
    if not isinstance(text, str) or not text.strip() or max_keywords <= 0:
        return []

    vocabulary = None if stopwords is None else frozenset(stopwords)
    tokens = [
        t
        for t in normalize_for_keywords(text).split()
        if MIN_KEYWORD_LENGTH <= len(t) <= MAX_KEYWORD_LENGTH
    ]
    if not tokens:
        return []

    importance = _importance_scores(tokens)
    originals, proper_nouns = _scan_original(text)

    keywords: list[Keyword] = []
    seen_tokens: set[str] = set()
    for token in tokens:
        if token in seen_tokens:
            continue
        seen_tokens.add(token)
        if is_stopword(token, vocabulary):
            continue
        if importance[token] < IMPORTANCE_THRESHOLD:
            continue
        keyword_type = _classify_type(
            token, originals.get(token, token), token in proper_nouns, vocabulary
        )
        keywords.append(Keyword(word=token, importance=importance[token], type=keyword_type))

    if include_phrases:
        keywords.extend(_extract_phrases(tokens, importance, vocabulary))

    keywords.sort(key=lambda kw: kw.importance, reverse=True)

    unique: list[Keyword] = []
    seen_words: set[str] = set()
    for kw in keywords:
        if kw.word in seen_words:
            continue
        seen_words.add(kw.word)
        unique.append(kw)
        if len(unique) >= max_keywords:
            break

    logger.debug("Extracted %d keywords from %d tokens", len(unique), len(tokens))
    return unique


def extract_keyword_strings(text: object, max_keywords: int = MAX_KEYWORDS) -> list[str]:
    """Keyword words only, in ranked order."""
    return [kw.word for kw in extract_keywords(text, max_keywords=max_keywords)]


# --- Internals ---


def _importance_scores(tokens: list[str]) -> dict[str, float]:
    """tf x ln(1 + max_freq / freq), scaled to the text's maximum."""
    freq = Counter(tokens)
    total = len(tokens)
    max_freq = max(freq.values())
    raw = {
        word: (count / total) * math.log(1.0 + max_freq / count)
        for word, count in freq.items()
    }
    top = max(raw.values())
    if top <= 0:
        return {word: 0.0 for word in raw}
    return {word: min(score / top, 1.0) for word, score in raw.items()}


def _scan_original(text: str) -> tuple[dict[str, str], set[str]]:
    """Map normalized words back to original fragments.

    Returns the first original fragment each normalized word came from, and
    the words seen capitalized away from a sentence start.
    """
    originals: dict[str, str] = {}
    proper_nouns: set[str] = set()
    sentence_start = True

    for raw in text.split():
        fragments = [f for f in _FRAGMENT_SPLIT_RE.split(raw) if f]
        for index, fragment in enumerate(fragments):
            capitalized = fragment[0].isupper()
            at_start = sentence_start and index == 0
            for word in normalize_for_keywords(fragment).split():
                originals.setdefault(word, fragment.strip("'-"))
                if capitalized and not at_start:
                    proper_nouns.add(word)
        sentence_start = bool(_SENTENCE_END_RE.search(raw))

    return originals, proper_nouns


def _classify_type(
    word: str,
    original_word: str,
    proper_noun: bool,
    vocabulary: frozenset[str] | None,
) -> KeywordType:
    if is_stopword(word, vocabulary):
        return "stopword"
    if is_technical_term(original_word):
        return "technical"
    if proper_noun or is_number(word) or is_date_word(word):
        return "entity"
    return "common"


def _extract_phrases(
    tokens: list[str],
    importance: dict[str, float],
    vocabulary: frozenset[str] | None,
) -> list[Keyword]:
    phrases: list[Keyword] = []
    for size in PHRASE_SIZES:
        for start in range(len(tokens) - size + 1):
            window = tokens[start:start + size]
            if all(is_stopword(w, vocabulary) for w in window):
                continue
            mean = sum(importance[w] for w in window) / size
            boosted = min(mean * PHRASE_BOOST, 1.0)
            if boosted < IMPORTANCE_THRESHOLD:
                continue
            phrases.append(Keyword(word=" ".join(window), importance=boosted, type="common"))
    return phrases
