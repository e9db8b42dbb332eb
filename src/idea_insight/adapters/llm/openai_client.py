"""OpenAI chat completions provider."""

from typing import Any

from idea_insight.adapters.llm.chat_client import ChatCompletionClient


class OpenAIClient(ChatCompletionClient):
    """OpenAI provider with JSON response format."""

    name = "openai"
    base_url = "https://api.openai.com/v1"
    default_model = "gpt-4o-mini"

    def _build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        payload = super()._build_payload(messages)
        payload["response_format"] = {"type": "json_object"}
        return payload
