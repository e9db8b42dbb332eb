"""Tests for configuration loading."""

from pathlib import Path

import pytest

from idea_insight.config import Settings, get_settings


def test_defaults_without_config_file(tmp_path: Path, monkeypatch) -> None:
    """Test defaults are used when no config file exists."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    settings = get_settings(tmp_path / "missing.yaml")

    assert settings.primary.name == "openai"
    assert settings.secondary.name == "perplexity"
    assert settings.evidence.min_evidence_items == 8
    assert settings.reddit.timeframe == "week"
    assert settings.analysis.deadline is None
    assert settings.openai_api_key == ""


def test_yaml_and_env(tmp_path: Path, monkeypatch) -> None:
    """Test YAML sections and environment keys are combined."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
reddit:
  timeframe: month
evidence:
  items_per_community: 5
primary:
  name: anthropic
  timeout: 12
analysis:
  deadline: 45
  taxonomy_path: taxonomy.yaml
""",
        encoding="utf-8",
    )
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
    monkeypatch.setenv("REDDIT_CLIENT_ID", "id")
    monkeypatch.setenv("REDDIT_CLIENT_SECRET", "secret")

    settings = get_settings(config_path)

    assert settings.reddit.timeframe == "month"
    assert settings.evidence.items_per_community == 5
    assert settings.primary.name == "anthropic"
    assert settings.primary.timeout == 12
    assert settings.secondary.name == "perplexity"
    assert settings.analysis.deadline == 45
    assert settings.analysis.taxonomy_path == Path("taxonomy.yaml")
    assert settings.api_key_for("anthropic") == "sk-ant"
    assert settings.has_reddit_credentials


def test_unknown_key_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("evidence:\n  per_page: 3\n", encoding="utf-8")

    with pytest.raises(ValueError, match="evidence.per_page"):
        get_settings(config_path)


def test_api_key_for_unknown_provider() -> None:
    settings = Settings(openai_api_key="sk-test")

    assert settings.api_key_for("openai") == "sk-test"
    assert settings.api_key_for("unknown") == ""
    assert not settings.has_reddit_credentials


def test_empty_sections_use_defaults(tmp_path: Path) -> None:
    """Test sections present without a body keep their defaults."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("reddit:\nevidence:\nprimary:\nanalysis:\n", encoding="utf-8")

    settings = get_settings(config_path)

    assert settings.reddit.timeframe == "week"
    assert settings.evidence.items_per_community == 8
    assert settings.primary.name == "openai"
    assert settings.analysis.deadline is None
