"""Completion provider adapters."""

from typing import Optional

from idea_insight.adapters.llm.chat_client import ChatCompletionClient
from idea_insight.adapters.llm.claude_client import ClaudeClient
from idea_insight.adapters.llm.openai_client import OpenAIClient
from idea_insight.adapters.llm.perplexity_client import PerplexityClient

PROVIDERS: dict[str, type[ChatCompletionClient]] = {
    OpenAIClient.name: OpenAIClient,
    PerplexityClient.name: PerplexityClient,
    ClaudeClient.name: ClaudeClient,
}


def create_provider(name: str, api_key: str, **options) -> Optional[ChatCompletionClient]:
    """Instantiate a provider by name, or None for an unknown name."""
    provider_cls = PROVIDERS.get(name)
    if provider_cls is None:
        return None
    return provider_cls(api_key=api_key, **options)


__all__ = [
    "ChatCompletionClient",
    "ClaudeClient",
    "OpenAIClient",
    "PerplexityClient",
    "PROVIDERS",
    "create_provider",
]
