# src/remote/retry.py
"""Retry policy with exponential backoff for remote generation calls.

Only transient failures are retried: timeouts, rate limiting, 5xx
responses and network errors marked `retryable`. Anything else, such as a
malformed endpoint URL, fails on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from answerfinder.core.errors import ErrorKind, RemoteError, RemoteTimeoutError, RemoteUpstreamError

logger = logging.getLogger(__name__)


class RemoteRetryExhausted(RemoteError):
    """All attempts for a remote call failed."""

    def __init__(self, error_type: str, attempts: int, last_error: Exception):
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Remote call failed after {attempts} attempts ({error_type}): {last_error}",
            details={"attempts": attempts, "error_type": error_type},
        )
        if isinstance(last_error, RemoteError):
            self.kind = last_error.kind
        else:
            self.kind = ErrorKind.REMOTE_UPSTREAM_ERROR


@dataclass(frozen=True)
class RetryConfig:
    """Retry configuration for a specific error type."""

    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = {
    "rate_limit": RetryConfig(max_retries=2, base_delay_s=2.0),
    "timeout": RetryConfig(max_retries=1, base_delay_s=0.5, backoff_factor=1.0),
    "server_error": RetryConfig(max_retries=2, base_delay_s=1.0),
}


def retry_configs_for(max_retries: int) -> dict[str, RetryConfig]:
    """Default policy with every error type capped at `max_retries`."""
    return {
        name: RetryConfig(
            max_retries=min(cfg.max_retries, max_retries),
            base_delay_s=cfg.base_delay_s,
            backoff_factor=cfg.backoff_factor,
            jitter=cfg.jitter,
        )
        for name, cfg in DEFAULT_RETRY_CONFIGS.items()
    }


def classify_error(error: Exception) -> str:
    """Classify an exception into a retry error type."""
    if isinstance(error, RemoteTimeoutError):
        return "timeout"
    if isinstance(error, RemoteUpstreamError):
        status = error.details.get("status_code")
        if status == 429:
            return "rate_limit"
        if isinstance(status, int) and status >= 500:
            return "server_error"
        if status is None:
            return "server_error" if error.details.get("retryable") else "client_error"
        return "client_error"
    return "unknown"


def _compute_delay(config: RetryConfig, attempt: int) -> float:
    """Compute delay for a given attempt (0-based)."""
    delay = config.base_delay_s * (config.backoff_factor ** attempt)
    if config.jitter:
        delay *= 0.5 + random.random()  # noqa: S311
    return delay


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Execute an async function with retry logic.

    Raises:
        RemoteRetryExhausted: If the error is not retryable or all retries
            are used up.
    """
    configs = DEFAULT_RETRY_CONFIGS if retry_configs is None else retry_configs
    attempts = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except RemoteError as e:
            error_type = classify_error(e)
            attempts += 1
            config = configs.get(error_type)

            if config is None or attempts > config.max_retries:
                raise RemoteRetryExhausted(error_type, attempts, e) from e

            delay = _compute_delay(config, attempts - 1)
            logger.warning(
                "Remote call %s (attempt %d/%d), retrying in %.1fs",
                error_type, attempts, config.max_retries, delay,
            )
            await asyncio.sleep(delay)
