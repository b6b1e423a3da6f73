# src/remote/remote_factory.py
"""Factory: instantiate the remote generator from settings."""

from __future__ import annotations

import logging

from answerfinder.config.settings import Settings
from answerfinder.remote.base_remote import BaseRemoteGenerator
from answerfinder.remote.retry import retry_configs_for

logger = logging.getLogger(__name__)


def create_remote_generator(
    settings: Settings,
    endpoint: str | None = None,
) -> BaseRemoteGenerator | None:
    """Build the HTTP remote generator, or None when no endpoint is configured.

    Args:
        settings: Application settings (timeout, confidence, retries).
        endpoint: Overrides settings.remote_endpoint.
    """
    target = endpoint or settings.remote_endpoint
    if not target:
        logger.debug("No remote endpoint configured, remote fallback unavailable")
        return None

    from answerfinder.remote.http_remote import HttpRemoteGenerator

    return HttpRemoteGenerator(
        endpoint=target,
        timeout_s=settings.remote_timeout_seconds,
        default_confidence=settings.remote_default_confidence,
        retry_configs=retry_configs_for(settings.remote_max_retries),
    )
