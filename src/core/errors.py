# src/core/errors.py
"""Typed errors and their caller-facing translation.

Every failure inside answerfinder is an AnswerFinderError subclass carrying
an ErrorKind. Callers never see raw exceptions from the caller-facing API:
they are converted to ErrorInfo via ErrorInfo.from_exception().
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Closed set of error categories surfaced to callers."""

    QUERY_EMPTY = "QUERY_EMPTY"
    QUERY_TOO_LONG = "QUERY_TOO_LONG"
    INVALID_INPUT = "INVALID_INPUT"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_TRANSACTION_FAILED = "STORE_TRANSACTION_FAILED"
    REMOTE_TIMEOUT = "REMOTE_TIMEOUT"
    REMOTE_UPSTREAM_ERROR = "REMOTE_UPSTREAM_ERROR"
    FILE_INVALID_FORMAT = "FILE_INVALID_FORMAT"
    FILE_ENCODING_ERROR = "FILE_ENCODING_ERROR"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNKNOWN = "UNKNOWN"


class AnswerFinderError(Exception):
    """Base class for all answerfinder errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class QueryValidationError(AnswerFinderError):
    """Query rejected before any matching tier runs."""

    kind = ErrorKind.INVALID_INPUT


class QueryEmptyError(QueryValidationError):
    kind = ErrorKind.QUERY_EMPTY


class QueryTooLongError(QueryValidationError):
    kind = ErrorKind.QUERY_TOO_LONG


class StoreError(AnswerFinderError):
    """Document store access failed."""

    kind = ErrorKind.STORE_UNAVAILABLE


class StoreUnavailableError(StoreError):
    kind = ErrorKind.STORE_UNAVAILABLE


class StoreTransactionError(StoreError):
    kind = ErrorKind.STORE_TRANSACTION_FAILED


class RemoteError(AnswerFinderError):
    """Remote answer generation failed."""

    kind = ErrorKind.REMOTE_UPSTREAM_ERROR


class RemoteTimeoutError(RemoteError):
    kind = ErrorKind.REMOTE_TIMEOUT


class RemoteUpstreamError(RemoteError):
    kind = ErrorKind.REMOTE_UPSTREAM_ERROR


class IngestionError(AnswerFinderError):
    """Q&A file could not be ingested."""

    kind = ErrorKind.FILE_INVALID_FORMAT


class FileInvalidFormatError(IngestionError):
    kind = ErrorKind.FILE_INVALID_FORMAT


class FileEncodingError(IngestionError):
    kind = ErrorKind.FILE_ENCODING_ERROR


class FileTooLargeError(IngestionError):
    kind = ErrorKind.FILE_TOO_LARGE


def user_message(kind: ErrorKind, details: dict[str, Any] | None = None) -> str:
    """Return a user-facing message for an error kind."""
    details = details or {}
    messages = {
        ErrorKind.QUERY_EMPTY: "Please provide a question to search for.",
        ErrorKind.QUERY_TOO_LONG: (
            f"Question is too long ({details.get('length', '?')} characters). "
            f"Maximum is {details.get('max_length', '?')}."
        ),
        ErrorKind.INVALID_INPUT: "The question could not be processed.",
        ErrorKind.STORE_UNAVAILABLE: "The answer collection is unavailable. Please retry later.",
        ErrorKind.STORE_TRANSACTION_FAILED: "Answer collection update failed. Please try again.",
        ErrorKind.REMOTE_TIMEOUT: "The remote answer service timed out.",
        ErrorKind.REMOTE_UPSTREAM_ERROR: "The remote answer service returned an error.",
        ErrorKind.FILE_INVALID_FORMAT: (
            f"Invalid file format. {details.get('reason', 'Please check the file structure.')}"
        ),
        ErrorKind.FILE_ENCODING_ERROR: "File encoding error. Please use UTF-8.",
        ErrorKind.FILE_TOO_LARGE: (
            f"File is too large ({details.get('size_mb', '?')}MB). "
            f"Maximum size is {details.get('max_size_mb', '?')}MB."
        ),
        ErrorKind.UNKNOWN: "An unexpected error occurred. Please try again.",
    }
    return messages.get(kind, messages[ErrorKind.UNKNOWN])


class ErrorInfo(BaseModel):
    """Caller-facing error description attached to a failed result."""

    kind: ErrorKind
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException) -> ErrorInfo:
        """Translate any exception into an ErrorInfo."""
        if isinstance(exc, AnswerFinderError):
            return cls(
                kind=exc.kind,
                message=user_message(exc.kind, exc.details),
                details={k: v for k, v in exc.details.items() if _is_plain(v)},
            )
        return cls(
            kind=ErrorKind.UNKNOWN,
            message=user_message(ErrorKind.UNKNOWN),
            details={"original_message": str(exc)},
        )


def log_error(
    exc: BaseException,
    stage: str,
    query_fingerprint: str | None = None,
) -> None:
    """Log an error with its originating stage and query fingerprint."""
    kind = exc.kind.value if isinstance(exc, AnswerFinderError) else ErrorKind.UNKNOWN.value
    logger.error(
        "%s failed (%s) for query %s: %s",
        stage, kind, query_fingerprint or "-", exc,
        exc_info=not isinstance(exc, AnswerFinderError),
    )


def _is_plain(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool)) or value is None
