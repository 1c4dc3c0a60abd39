"""Base completion provider interface and error classification."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from mentor.types import ProviderConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error Classification
# ---------------------------------------------------------------------------


class CompletionError(Exception):
    """Base exception for completion provider errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigError(CompletionError):
    """Missing or empty credential."""


class TransportError(CompletionError):
    """Network or HTTP-level failure."""


class ServiceError(CompletionError):
    """The service answered but produced no usable completion."""


def classify_http_error(status_code: int, message: str) -> CompletionError:
    """Classify a non-2xx response that carried no service error message.

    Args:
        status_code: HTTP status code
        message: Error message

    Returns:
        Appropriate CompletionError subclass
    """
    if status_code in {401, 403}:
        return TransportError(f"Authentication rejected ({status_code}): {message}", status_code)
    if status_code == 429:
        return TransportError(f"Rate limited ({status_code}): {message}", status_code)
    if 500 <= status_code < 600:
        return TransportError(f"Server error ({status_code}): {message}", status_code)
    return TransportError(f"HTTP {status_code}: {message}", status_code)


class CompletionProvider(ABC):
    """Abstract base for chat-completion clients.

    A call sends one system instruction plus one user message and returns
    the generated text. Implementations are stateless between calls and
    never retry; failures surface immediately as ``CompletionError``.
    """

    def __init__(self, config: ProviderConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client

    @property
    def model(self) -> str:
        return self.config.model

    @abstractmethod
    async def complete(self, system_instruction: str, user_message: str) -> str:
        """Send a chat-completion request and return the generated text.

        Raises:
            ConfigError: credential missing or empty
            TransportError: network / HTTP failure
            ServiceError: no usable completion in the response
        """

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers={"Content-Type": "application/json"},
                timeout=httpx.Timeout(self.config.timeout_seconds),
            )
        return self._client

    async def close(self) -> None:
        """Close any open HTTP connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
