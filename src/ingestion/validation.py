# src/ingestion/validation.py
"""File-level checks and cleanup applied before parsing."""

from __future__ import annotations

from answerfinder.core.errors import FileEncodingError, FileTooLargeError

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
_BOM = "\ufeff"
_REPLACEMENT_CHAR = "\ufffd"


def validate_file_size(size_bytes: int, max_bytes: int = DEFAULT_MAX_FILE_SIZE) -> None:
    """Raise FileTooLargeError when `size_bytes` exceeds `max_bytes`."""
    if size_bytes > max_bytes:
        raise FileTooLargeError(
            "File is too large",
            details={
                "size": size_bytes,
                "max_size": max_bytes,
                "size_mb": round(size_bytes / 1024 / 1024, 2),
                "max_size_mb": round(max_bytes / 1024 / 1024, 2),
            },
        )


def decode_content(raw: bytes) -> str:
    """Strict UTF-8 decode, BOM removed."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileEncodingError(
            "Invalid file encoding. Please use UTF-8.",
            details={"position": e.start},
        ) from e
    return remove_bom(text)


def validate_encoding(content: str) -> None:
    """Reject text that already went through a lossy decode."""
    if _REPLACEMENT_CHAR in content:
        raise FileEncodingError("Invalid file encoding. Please use UTF-8.")


def remove_bom(content: str) -> str:
    return content[1:] if content.startswith(_BOM) else content


def normalize_line_endings(content: str) -> str:
    """Convert CRLF and lone CR to LF."""
    return content.replace("\r\n", "\n").replace("\r", "\n")
