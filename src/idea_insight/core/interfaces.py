"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Any

from idea_insight.core.entities import EvidenceItem


class DiscussionSource(ABC):
    """Interface for fetching discussion items from a community."""

    name: str = "source"

    @abstractmethod
    async def fetch_items(self, community: str, limit: int) -> list[EvidenceItem]:
        """Fetch recent items from the given community.

        Raises:
            EvidenceFetchError: on network, auth or rate-limit failures.
        """
        pass


class CompletionProvider(ABC):
    """Interface for LLM completion services."""

    name: str = "provider"

    @abstractmethod
    async def complete_json(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Send role-structured messages and return the parsed JSON object.

        Raises:
            ProviderUnavailableError: on network errors or non-2xx responses.
            SchemaParseError: when the response is not a JSON object.
        """
        pass
