"""Perplexity chat completions provider."""

from idea_insight.adapters.llm.chat_client import ChatCompletionClient


class PerplexityClient(ChatCompletionClient):
    """Perplexity provider. Replies may wrap JSON in prose or code fences."""

    name = "perplexity"
    base_url = "https://api.perplexity.ai"
    default_model = "sonar"
