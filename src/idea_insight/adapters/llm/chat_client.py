"""Shared HTTP plumbing for chat-completion providers."""

import asyncio
import logging
from typing import Any

import httpx

from idea_insight.adapters.llm.json_parsing import extract_json_object
from idea_insight.core import CompletionProvider, ProviderUnavailableError, SchemaParseError

logger = logging.getLogger(__name__)


class ChatCompletionClient(CompletionProvider):
    """OpenAI-compatible chat completions client.

    Subclasses set the endpoint and default model, and may override the
    payload, headers and response extraction for other APIs.
    """

    name = "chat"
    base_url = ""
    endpoint = "/chat/completions"
    default_model = ""

    def __init__(
        self,
        api_key: str,
        model: str = "",
        max_tokens: int = 1500,
        temperature: float = 0.2,
        timeout: float = 30.0,
        max_retries: int = 1,
        initial_retry_delay: float = 1.0,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.default_model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.initial_retry_delay = initial_retry_delay

    async def complete_json(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Send messages and parse the JSON object in the reply."""
        if not self.api_key:
            raise ProviderUnavailableError(self.name, "API key not configured")

        text = await self._call_api(messages)
        parsed = extract_json_object(text)
        if not isinstance(parsed, dict):
            logger.debug("%s returned unparseable content: %.200s", self.name, text)
            raise SchemaParseError(self.name, "response does not contain a JSON object")
        return parsed

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    def _extract_text(self, data: dict[str, Any]) -> str:
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise SchemaParseError(self.name, f"unexpected response shape: {e}") from e

    async def _call_api(self, messages: list[dict[str, str]]) -> str:
        """Call the API with retries on rate limits and server errors."""
        reason = "no attempts made"

        for attempt in range(self.max_retries):
            is_last = attempt == self.max_retries - 1
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        f"{self.base_url}{self.endpoint}",
                        headers=self._headers(),
                        json=self._build_payload(messages),
                    )
            except httpx.TimeoutException as e:
                reason = f"timeout after {self.timeout}s"
                if is_last:
                    raise ProviderUnavailableError(self.name, reason) from e
                await asyncio.sleep(self._backoff(attempt))
                continue
            except httpx.RequestError as e:
                reason = f"network error: {e}"
                if is_last:
                    raise ProviderUnavailableError(self.name, reason) from e
                await asyncio.sleep(self._backoff(attempt))
                continue

            if response.status_code == 200:
                try:
                    data = response.json()
                except ValueError as e:
                    raise SchemaParseError(self.name, f"invalid JSON body: {e}") from e
                return self._extract_text(data)

            reason = f"HTTP {response.status_code}"
            if response.status_code == 429 or response.status_code >= 500:
                if not is_last:
                    delay = self._get_retry_delay(response, attempt)
                    logger.info(
                        "%s returned %s, retrying after %.1fs (attempt %d/%d)",
                        self.name, response.status_code, delay, attempt + 1, self.max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue

            raise ProviderUnavailableError(self.name, reason)

        raise ProviderUnavailableError(self.name, reason)

    def _backoff(self, attempt: int) -> float:
        return self.initial_retry_delay * (2 ** attempt)

    def _get_retry_delay(self, response: httpx.Response, attempt: int) -> float:
        """Calculate retry delay from response headers or use exponential backoff."""
        retry_after = response.headers.get("retry-after")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass
        return self._backoff(attempt)
