"""Claude API provider."""

from typing import Any

from idea_insight.adapters.llm.chat_client import ChatCompletionClient
from idea_insight.core import SchemaParseError


class ClaudeClient(ChatCompletionClient):
    """Anthropic messages API provider."""

    name = "anthropic"
    base_url = "https://api.anthropic.com/v1"
    endpoint = "/messages"
    default_model = "claude-sonnet-4-20250514"

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }

    def _build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        # System prompt goes in a top-level field, not in the message list
        system = "\n\n".join(m["content"] for m in messages if m["role"] == "system")
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": [m for m in messages if m["role"] != "system"],
        }
        if system:
            payload["system"] = system
        return payload

    def _extract_text(self, data: dict[str, Any]) -> str:
        try:
            return "".join(
                block["text"] for block in data["content"] if block.get("type") == "text"
            )
        except (KeyError, TypeError) as e:
            raise SchemaParseError(self.name, f"unexpected response shape: {e}") from e
