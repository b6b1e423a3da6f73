# src/normalization/stopwords.py
"""English stop-word set with a protected subset.

Question words and polarity qualifiers are never treated as stop-words,
even where they also appear in ENGLISH_STOPWORDS.
"""

from __future__ import annotations

from collections.abc import Iterable

ENGLISH_STOPWORDS: frozenset[str] = frozenset({
    # articles
    "a", "an", "the",
    # pronouns
    "i", "you", "he", "she", "it", "we", "they", "them", "their", "theirs",
    "me", "him", "her", "us", "my", "your", "his", "its", "our",
    "myself", "yourself", "himself", "herself", "itself", "ourselves",
    "themselves", "this", "that", "these", "those",
    # prepositions
    "in", "on", "at", "to", "for", "with", "from", "by", "about", "as",
    "into", "through", "during", "before", "after", "above", "below",
    "between", "under", "over", "of", "off", "up", "down", "out",
    # conjunctions
    "and", "or", "but", "nor", "so", "yet", "if", "because", "while",
    "although", "though", "unless", "since", "until", "when", "where",
    # auxiliaries
    "is", "am", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "having",
    "do", "does", "did", "doing",
    "will", "would", "shall", "should", "may", "might", "must", "can", "could",
    # common verbs
    "get", "got", "getting", "make", "made", "making",
    "go", "went", "going", "gone", "come", "came", "coming",
    "take", "took", "taken", "taking", "see", "saw", "seen", "seeing",
    "know", "knew", "known", "knowing", "think", "thought", "thinking",
    "say", "said", "saying", "tell", "told", "telling",
    "give", "gave", "given", "giving", "find", "found", "finding",
    "use", "used", "using", "want", "wanted", "wanting",
    "work", "worked", "working", "call", "called", "calling",
    "try", "tried", "trying", "ask", "asked", "asking",
    "need", "needed", "needing", "feel", "felt", "feeling",
    "become", "became", "becoming", "leave", "left", "leaving",
    "put", "putting",
    # other
    "not", "no", "yes",
    "all", "any", "some", "many", "much", "more", "most", "few", "less", "least",
    "each", "every", "both", "either", "neither", "other", "another",
    "such", "same", "different",
    "very", "too", "quite", "rather", "just", "only", "even", "also", "still",
    "here", "there", "now", "then", "today", "tomorrow", "yesterday",
    "always", "never", "sometimes", "often", "usually", "seldom",
    "again", "back", "away", "around", "than", "once", "twice",
    "one", "two", "first", "second", "last", "next",
    "new", "old", "good", "bad", "big", "small", "long", "short",
    "high", "low", "right", "near", "far",
    "well", "better", "best", "worse", "worst",
    "own", "sure", "certain",
    "however", "therefore", "thus", "hence", "moreover", "furthermore",
    "etc", "ie", "eg", "vs", "via",
})

QUESTION_WORDS: frozenset[str] = frozenset({
    "what", "when", "where", "which", "who", "whom", "whose", "why", "how",
})

IMPORTANT_QUALIFIERS: frozenset[str] = frozenset({
    "not", "never", "always", "only", "must", "should", "can", "cannot",
    "true", "false", "correct", "incorrect", "right", "wrong",
})

PROTECTED_WORDS: frozenset[str] = QUESTION_WORDS | IMPORTANT_QUALIFIERS


def is_stopword(word: str, stopwords: Iterable[str] | None = None) -> bool:
    """True if `word` (lowercase) is a stop-word and not protected.

    Args:
        word: Lowercase token.
        stopwords: Replacement stop-word set. Defaults to ENGLISH_STOPWORDS.
    """
    if word in PROTECTED_WORDS:
        return False
    vocabulary = ENGLISH_STOPWORDS if stopwords is None else stopwords
    return word in vocabulary
