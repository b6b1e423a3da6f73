# src/core/hashing.py
"""Deterministic SHA-256 identifiers for documents and cached queries."""

from __future__ import annotations

import hashlib

QUERY_FINGERPRINT_LENGTH = 12


def sha256_hex(text: str) -> str:
    """Hex SHA-256 digest of UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def document_id(normalized_question: str, line_number: int, file_name: str) -> str:
    """Content-derived document identity.

    Identical normalized text at the same source position always maps to
    the same id, so re-importing a file does not duplicate documents.
    """
    return sha256_hex(f"{normalized_question}|{line_number}|{file_name}")


def cache_key(query: str) -> str:
    """Cache key for a raw, unnormalized query."""
    return sha256_hex(query)


def query_fingerprint(query: str) -> str:
    """Short, log-safe stand-in for a query."""
    return sha256_hex(query if isinstance(query, str) else repr(query))[
        :QUERY_FINGERPRINT_LENGTH
    ]
