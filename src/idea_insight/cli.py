"""CLI entry point for idea insight."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from idea_insight.adapters.llm import create_provider
from idea_insight.adapters.sources import RedditSource
from idea_insight.config import ProviderConfig, Settings, get_settings
from idea_insight.core import AnalysisHints, IdeaClassifier, InvalidInputError, Taxonomy
from idea_insight.core.entities import AnalysisResult
from idea_insight.use_cases import AnalysisService, EvidenceGatherer, SynthesisOrchestrator


def build_provider(settings: Settings, config: ProviderConfig):
    """Create the configured provider, or None if the name is unknown."""
    return create_provider(
        config.name,
        api_key=settings.api_key_for(config.name),
        model=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        timeout=config.timeout,
        max_retries=config.max_retries,
        initial_retry_delay=config.initial_retry_delay,
    )


def build_service(settings: Settings) -> AnalysisService:
    """Wire the analysis pipeline from settings."""
    if settings.analysis.taxonomy_path:
        taxonomy = Taxonomy.from_yaml(settings.analysis.taxonomy_path)
    else:
        taxonomy = Taxonomy.default()

    source = RedditSource(
        client_id=settings.reddit_client_id or None,
        client_secret=settings.reddit_client_secret or None,
        user_agent=settings.reddit.user_agent,
        timeframe=settings.reddit.timeframe,
        timeout=settings.reddit.request_timeout,
    )
    gatherer = EvidenceGatherer(
        source=source,
        items_per_community=settings.evidence.items_per_community,
        min_evidence_items=settings.evidence.min_evidence_items,
        fetch_timeout=settings.evidence.fetch_timeout,
    )
    orchestrator = SynthesisOrchestrator(
        primary=build_provider(settings, settings.primary),
        secondary=build_provider(settings, settings.secondary),
        # Per-call budget covers the provider's own retries
        timeout=max(
            config.timeout * max(1, config.max_retries)
            for config in (settings.primary, settings.secondary)
        ),
    )
    return AnalysisService(
        classifier=IdeaClassifier(taxonomy),
        gatherer=gatherer,
        orchestrator=orchestrator,
        taxonomy=taxonomy,
    )


def print_summary(result: AnalysisResult) -> None:
    """Print a short human-readable summary."""
    c = result.classification
    print("\n" + "=" * 70)
    print("💡 IDEA INSIGHT")
    print("=" * 70)
    print(f"  • Domain: {c.problem_domain}")
    print(f"  • Audience: {c.target_audience}")
    print(f"  • Solution: {c.solution_type}")
    print(f"  • Communities: {', '.join(result.community_names)}")
    print(
        f"  • Evidence: {result.evidence.real_count} real, "
        f"{result.evidence.synthetic_count} synthetic ({result.evidence.quality})"
    )
    for community, reason in result.evidence.fetch_failures:
        print(f"    ⚠️  r/{community}: {reason}")
    if result.engagement:
        e = result.engagement
        print(
            f"  • Market interest: {e.market_interest_level} "
            f"(score {e.overall_score}, viability {e.viability_score})"
        )
    print(f"  • Confidence: {result.confidence.value} ({result.provider})")
    print(f"\n📝 {result.provenance_note}")


def main(
    idea: str = typer.Argument(..., help="Idea description"),
    industry: Optional[str] = typer.Option(None, "--industry", help="Industry hint"),
    audience: Optional[str] = typer.Option(None, "--audience", help="Target audience hint"),
    solution: Optional[str] = typer.Option(None, "--solution", help="Solution type hint"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    output: Optional[Path] = typer.Option(None, "--output", help="Write JSON result to file"),
    deadline: Optional[float] = typer.Option(None, "--deadline", help="Overall deadline in seconds"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable info logging"),
) -> None:
    """Classify a startup idea and synthesize market evidence."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    hints = None
    if industry or audience or solution:
        hints = AnalysisHints(industry=industry, target_audience=audience, solution_type=solution)

    try:
        result = asyncio.run(async_run(idea, hints, config, deadline))
    except InvalidInputError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=2)

    print_summary(result)

    data = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(data, encoding="utf-8")
        print(f"\n✓ Result saved to {output}")
    else:
        print(data)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


async def async_run(
    idea: str,
    hints: Optional[AnalysisHints],
    config_path: Path,
    deadline: Optional[float],
) -> AnalysisResult:
    """Async implementation of the analyze command."""
    settings = get_settings(config_path)
    service = build_service(settings)
    return await service.analyze(
        idea,
        hints=hints,
        deadline=deadline if deadline is not None else settings.analysis.deadline,
    )
