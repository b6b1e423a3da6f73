# src/core/similarity.py
"""String-similarity primitives shared by the matching tiers.

Edit distance and Jaro-Winkler come from rapidfuzz. Set overlap, substring
containment and positional word overlap are simple enough to compute here.
All similarity functions return values in [0, 1].
"""

from __future__ import annotations

from collections.abc import Iterable

from rapidfuzz.distance import JaroWinkler, Levenshtein

JARO_WINKLER_PREFIX_WEIGHT = 0.1


def tokenize(text: str) -> list[str]:
    """Lowercase and split on whitespace, dropping empty tokens."""
    return text.lower().split()


def levenshtein_distance(a: str, b: str) -> int:
    """Number of single-character edits turning `a` into `b`."""
    return Levenshtein.distance(a, b)


def levenshtein_similarity(a: str, b: str) -> float:
    """Edit-distance similarity normalized by the longer string's length."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


def jaro_winkler_similarity(a: str, b: str) -> float:
    """Prefix-weighted Jaro similarity.

    Characters only count as matching within a window of half the longer
    string's length; up to four shared leading characters raise the score.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return JaroWinkler.similarity(a, b, prefix_weight=JARO_WINKLER_PREFIX_WEIGHT)


def jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    """Intersection over union of two string collections."""
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def substring_score(a: str, b: str) -> float:
    """len(shorter) / len(longer) when one contains the other, else 0."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    shorter, longer = (a, b) if len(a) < len(b) else (b, a)
    if shorter in longer:
        return len(shorter) / len(longer)
    return 0.0


def word_position_similarity(a: str, b: str) -> float:
    """Same-index token equality divided by the longer token count."""
    words_a = tokenize(a)
    words_b = tokenize(b)
    if not words_a or not words_b:
        return 0.0
    same = sum(1 for wa, wb in zip(words_a, words_b) if wa == wb)
    return same / max(len(words_a), len(words_b))
