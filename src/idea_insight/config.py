"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class RedditConfig:
    """Reddit API settings."""
    user_agent: str = "idea-insight/0.1 (market research)"
    timeframe: str = "week"
    request_timeout: float = 8.0


@dataclass
class EvidenceConfig:
    """Evidence gathering settings."""
    items_per_community: int = 8
    min_evidence_items: int = 8
    fetch_timeout: float = 8.0


@dataclass
class ProviderConfig:
    """Completion provider settings."""
    name: str = "openai"
    model: str = ""
    max_tokens: int = 1500
    temperature: float = 0.2
    timeout: float = 30.0
    max_retries: int = 1
    initial_retry_delay: float = 1.0


@dataclass
class AnalysisConfig:
    """Pipeline settings."""
    deadline: Optional[float] = None
    taxonomy_path: Optional[Path] = None


@dataclass
class Settings:
    """Application settings."""

    # API keys (from environment only)
    openai_api_key: str = ""
    perplexity_api_key: str = ""
    anthropic_api_key: str = ""
    reddit_client_id: str = ""
    reddit_client_secret: str = ""

    # Config sections
    reddit: RedditConfig = field(default_factory=RedditConfig)
    evidence: EvidenceConfig = field(default_factory=EvidenceConfig)
    primary: ProviderConfig = field(default_factory=lambda: ProviderConfig(name="openai"))
    secondary: ProviderConfig = field(default_factory=lambda: ProviderConfig(name="perplexity"))
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    def api_key_for(self, provider_name: str) -> str:
        """API key for a provider name, empty if unknown."""
        return {
            "openai": self.openai_api_key,
            "perplexity": self.perplexity_api_key,
            "anthropic": self.anthropic_api_key,
        }.get(provider_name, "")

    @property
    def has_reddit_credentials(self) -> bool:
        return bool(self.reddit_client_id and self.reddit_client_secret)


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        perplexity_api_key=os.getenv("PERPLEXITY_API_KEY", ""),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
        reddit_client_id=os.getenv("REDDIT_CLIENT_ID", ""),
        reddit_client_secret=os.getenv("REDDIT_CLIENT_SECRET", ""),
    )

    for section in ("reddit", "evidence", "primary", "secondary"):
        for key, value in (config.get(section) or {}).items():
            if not hasattr(getattr(settings, section), key):
                raise ValueError(f"Unknown setting: {section}.{key}")
            setattr(getattr(settings, section), key, value)

    analysis = config.get("analysis") or {}
    if analysis:
        settings.analysis.deadline = analysis.get("deadline")
        if analysis.get("taxonomy_path"):
            settings.analysis.taxonomy_path = Path(analysis["taxonomy_path"])

    return settings
