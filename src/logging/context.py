# src/logging/context.py
"""Per-query logging context carried through the async pipeline.

Values live in contextvars, so concurrent queries on one event loop never
see each other's context.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

_query_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "query_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    query_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(query_id=_query_id.get(), stage=_stage.get())


def set_stage(stage: str | None) -> None:
    _stage.set(stage)


@contextmanager
def query_context(query_id: str) -> Iterator[None]:
    """Scope query_id (and a fresh stage) to a block, restoring the previous values."""
    query_token = _query_id.set(query_id)
    stage_token = _stage.set(None)
    try:
        yield
    finally:
        _stage.reset(stage_token)
        _query_id.reset(query_token)
