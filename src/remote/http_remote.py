# src/remote/http_remote.py
"""HTTP remote generator implementing BaseRemoteGenerator.

Talks to a text-generation proxy: POST {"inputs": prompt}, read
{"generated_text": ...} back (a one-element list of that object is
accepted too). Each attempt runs under its own deadline.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from answerfinder.core.errors import RemoteTimeoutError, RemoteUpstreamError
from answerfinder.core.models import RemoteRequest, RemoteResponse
from answerfinder.remote.base_remote import BaseRemoteGenerator
from answerfinder.remote.prompt_builder import build_prompt, parse_remote_response
from answerfinder.remote.retry import RetryConfig, with_retry

logger = logging.getLogger(__name__)


class HttpRemoteGenerator(BaseRemoteGenerator):
    """Remote answer generator over HTTP using httpx."""

    def __init__(
        self,
        endpoint: str,
        timeout_s: float = 15.0,
        default_confidence: float = 0.7,
        retry_configs: dict[str, RetryConfig] | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if not endpoint:
            raise ValueError("endpoint is required")
        self._endpoint = endpoint
        self._timeout_s = timeout_s
        self._default_confidence = default_confidence
        self._retry_configs = retry_configs
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._client = client
        self._owns_client = client is None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def generate(self, request: RemoteRequest) -> RemoteResponse:
        prompt = build_prompt(request.question, request.candidates)

        t0 = time.monotonic()
        text = await with_retry(self._post_once, prompt, retry_configs=self._retry_configs)
        latency = int((time.monotonic() - t0) * 1000)

        answer, reasoning = parse_remote_response(text)
        logger.info(
            "Remote generation finished in %d ms (answer %s)",
            latency, "present" if answer else "empty",
        )
        return RemoteResponse(
            success=bool(answer),
            answer=answer,
            reasoning=reasoning,
            confidence=self._default_confidence if answer else 0.0,
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # --- Internals ---

    async def _post_once(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await asyncio.wait_for(
                client.post(self._endpoint, json={"inputs": prompt}, headers=self._headers),
                timeout=self._timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RemoteTimeoutError(
                f"Remote call exceeded {self._timeout_s}s",
                details={"timeout_s": self._timeout_s},
            ) from e
        except (httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise RemoteUpstreamError(
                f"Remote request failed: {e}", details={"retryable": True},
            ) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise RemoteUpstreamError(
                f"Remote request rejected: {e}", details={"retryable": False},
            ) from e

        if response.status_code < 200 or response.status_code >= 300:
            raise RemoteUpstreamError(
                f"Remote endpoint returned HTTP {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteUpstreamError(
                "Remote endpoint returned invalid JSON",
                details={"status_code": response.status_code},
            ) from e
        return _extract_generated_text(payload)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout_s)
        return self._client


def _extract_generated_text(payload: Any) -> str:
    if isinstance(payload, list):
        payload = payload[0] if payload else {}
    if not isinstance(payload, dict):
        return ""
    text = payload.get("generated_text", "")
    return text if isinstance(text, str) else ""
