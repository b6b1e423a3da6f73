# src/ingestion/parser_factory.py
"""Factory: pick a parser from the file extension, read and parse files."""

from __future__ import annotations

from pathlib import Path

from answerfinder.ingestion.base_parser import BaseParser
from answerfinder.ingestion.json_parser import JsonParser
from answerfinder.ingestion.models import ParseResult
from answerfinder.ingestion.txt_parser import TxtParser
from answerfinder.ingestion.validation import (
    DEFAULT_MAX_FILE_SIZE,
    decode_content,
    validate_file_size,
)

_PARSER_REGISTRY: dict[str, type[BaseParser]] = {}


def _register_defaults() -> None:
    for cls in [TxtParser, JsonParser]:
        for ext in cls().supported_extensions:
            _PARSER_REGISTRY[ext.lower()] = cls


_register_defaults()


class UnsupportedFormatError(ValueError):
    """Raised when no parser is available for a format."""


def create_parser(extension: str) -> BaseParser:
    """Parser for a file extension, with or without the leading dot.

    Raises:
        UnsupportedFormatError: If no parser is registered.
    """
    ext = extension.lower()
    if not ext.startswith("."):
        ext = f".{ext}"

    cls = _PARSER_REGISTRY.get(ext)
    if cls is None:
        raise UnsupportedFormatError(
            f"No parser for format {ext!r}. "
            f"Supported: {', '.join(sorted(_PARSER_REGISTRY))}"
        )
    return cls()


def supported_extensions() -> list[str]:
    return sorted(_PARSER_REGISTRY)


def parse_content(content: str, file_name: str, fmt: str | None = None) -> ParseResult:
    """Parse already-decoded content. `fmt` defaults to the file name's extension."""
    return create_parser(fmt or Path(file_name).suffix).parse(content, file_name)


def parse_file(path: str | Path, max_bytes: int = DEFAULT_MAX_FILE_SIZE) -> ParseResult:
    """Read, size-check, decode and parse a Q&A file.

    Raises:
        UnsupportedFormatError: Unknown extension.
        FileTooLargeError: File exceeds `max_bytes`.
        FileEncodingError: File is not UTF-8.
        FileInvalidFormatError: File structure cannot be parsed.
    """
    p = Path(path)
    parser = create_parser(p.suffix)
    validate_file_size(p.stat().st_size, max_bytes)
    content = decode_content(p.read_bytes())
    return parser.parse(content, p.name)
