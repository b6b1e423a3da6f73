# src/remote/base_remote.py
"""Abstract remote answer generator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from answerfinder.core.models import RemoteRequest, RemoteResponse


class BaseRemoteGenerator(ABC):
    """Produces an answer when no local tier matched."""

    @abstractmethod
    async def generate(self, request: RemoteRequest) -> RemoteResponse:
        """Generate an answer.

        Raises:
            RemoteTimeoutError: The call exceeded its deadline.
            RemoteError: Any other upstream or transport failure.
        """

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Target the generator talks to."""

    async def aclose(self) -> None:
        """Release network resources. Default: no-op."""
