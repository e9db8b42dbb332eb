"""Error taxonomy for the analysis pipeline."""


class IdeaInsightError(Exception):
    """Base error for the package."""


class InvalidInputError(IdeaInsightError, ValueError):
    """Idea text is missing, too short or too long."""


class EvidenceFetchError(IdeaInsightError):
    """Fetching discussion items for one community failed."""

    def __init__(self, community: str, reason: str) -> None:
        super().__init__(f"r/{community}: {reason}")
        self.community = community
        self.reason = reason


class ProviderUnavailableError(IdeaInsightError):
    """Completion provider could not produce a usable answer."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class SchemaParseError(ProviderUnavailableError):
    """Completion response does not match the synthesis schema."""


class OperationCancelledError(IdeaInsightError):
    """Upstream cancellation or deadline fired during a network call."""


class AssemblyError(RuntimeError):
    """Result assembler received incomplete input."""
