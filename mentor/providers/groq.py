"""Groq provider adapter (OpenAI-compatible chat completions)."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

import httpx

from mentor.providers.base import (
    CompletionProvider,
    ConfigError,
    ServiceError,
    TransportError,
    classify_http_error,
)
from mentor.types import ProviderConfig

logger = logging.getLogger(__name__)

GROQ_CONFIG = ProviderConfig(
    api_key_env="GROQ_API_KEY",
    base_url="https://api.groq.com/openai",
    chat_path="/v1/chat/completions",
    model="llama3-70b-8192",
    max_tokens=1000,
    timeout_seconds=60,
)


def _service_error_message(data: Any) -> str | None:
    """Extract ``error.message`` from a response body, if there is one."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return None


def _first_choice_text(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class GroqProvider(CompletionProvider):
    """Groq API adapter.

    Notes:
        - The credential is read from the environment on every call, so a
          key exported after startup is picked up without a restart.
        - One request per call; no streaming, no retries.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config or GROQ_CONFIG, client)

    def _api_key(self) -> str:
        api_key = os.environ.get(self.config.api_key_env, "").strip()
        if not api_key:
            raise ConfigError(f"Missing {self.config.api_key_env}")
        return api_key

    async def complete(self, system_instruction: str, user_message: str) -> str:
        """Send a chat-completion request to Groq."""
        api_key = self._api_key()

        payload = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_message},
            ],
            "max_tokens": self.config.max_tokens,
        }

        client = await self._get_client()
        url = self.config.chat_path
        logger.debug("POST %s (model=%s, %d chars)", url, self.config.model, len(user_message))

        try:
            resp = await client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
            )
        except UnicodeEncodeError as e:
            logger.error("Groq request body could not be encoded: %s", e)
            raise TransportError(f"POST {url} could not encode request body: {e}") from e
        except httpx.TimeoutException as e:
            logger.error("Groq request timed out: %s", e)
            raise TransportError(f"POST {url} timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Groq request failed: %s", e)
            raise TransportError(f"POST {url} network error: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.is_error:
            service_message = _service_error_message(data)
            if service_message:
                logger.error("Groq returned %d: %s", resp.status_code, service_message)
                raise ServiceError(service_message, resp.status_code)
            raise classify_http_error(resp.status_code, resp.text[:200])

        if data is None:
            raise ServiceError(f"Non-JSON response body: {resp.text[:200]}", resp.status_code)

        text = _first_choice_text(data)
        if text is None:
            message = _service_error_message(data) or json.dumps(data)
            logger.error("Groq returned no usable choice: %s", message)
            raise ServiceError(message, resp.status_code)

        return text
