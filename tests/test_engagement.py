"""Tests for engagement-derived market signals."""

import pytest

from idea_insight.core import (
    Classification,
    EvidenceItem,
    EvidenceSet,
    PainPoint,
    Provenance,
    SynthesisContent,
)
from idea_insight.core.engagement import compute_engagement, interest_level, trend_bonus

EMPTY_SYNTHESIS = SynthesisContent(
    industry="General Business",
    keywords=(),
    target_audience="Everyone",
    business_model="Subscription",
    revenue_potential="Unknown",
)
RICH_SYNTHESIS = SynthesisContent(
    industry="Technology",
    keywords=tuple(f"kw{i}" for i in range(8)),
    target_audience="Developers",
    business_model="SaaS",
    revenue_potential="High",
    pain_points=tuple(PainPoint(title=f"Pain {i}") for i in range(3)),
)


def post(score: int, comments: int, provenance: Provenance = Provenance.REAL, body: str = "") -> EvidenceItem:
    return EvidenceItem(
        source_community="startups",
        title="Discussion",
        engagement_score=score,
        comment_count=comments,
        provenance=provenance,
        body_text=body or None,
    )


POPULAR = tuple(post(100, 50, body="x" * 150) for _ in range(15))


def test_baseline_without_real_posts() -> None:
    """Test synthetic-only evidence uses the neutral baseline."""
    evidence = EvidenceSet(items=tuple(post(9999, 999, Provenance.SYNTHETIC) for _ in range(8)))

    metrics = compute_engagement(evidence, EMPTY_SYNTHESIS, Classification())

    assert metrics.posts_analyzed == 0
    assert metrics.avg_score == 15.0
    assert metrics.avg_comments == 3.0
    assert (metrics.enthusiastic, metrics.mixed, metrics.frustrated) == (35, 55, 10)
    assert metrics.overall_score == pytest.approx(1.3)
    assert metrics.market_interest_level == "low"


def test_popular_discussions_score_high() -> None:
    """Test strong engagement, keywords and pain points give a high score."""
    metrics = compute_engagement(EvidenceSet(items=POPULAR), RICH_SYNTHESIS, Classification())

    assert metrics.posts_analyzed == 15
    assert metrics.enthusiastic == 65
    assert metrics.frustrated == 24
    assert metrics.mixed == 15
    assert metrics.overall_score == pytest.approx(8.8)
    assert metrics.viability_score == pytest.approx(8.8)
    assert metrics.market_interest_level == "high"


def test_synthetic_items_ignored() -> None:
    """Test placeholder engagement never changes the scores."""
    noisy = EvidenceSet(items=POPULAR + tuple(post(5000, 900, Provenance.SYNTHETIC) for _ in range(10)))

    assert compute_engagement(noisy, RICH_SYNTHESIS, Classification()) == compute_engagement(
        EvidenceSet(items=POPULAR), RICH_SYNTHESIS, Classification()
    )


@pytest.mark.parametrize(
    "classification, overall, viability",
    [
        (Classification(solution_type="ai_solution"), 10.0, 10.0),
        (Classification(problem_domain="fitness"), 9.7, 10.0),
    ],
)
def test_trend_bonus_raises_scores(classification: Classification, overall: float, viability: float) -> None:
    metrics = compute_engagement(EvidenceSet(items=POPULAR), RICH_SYNTHESIS, classification)

    assert metrics.overall_score == pytest.approx(overall)
    assert metrics.viability_score == pytest.approx(viability)


def test_high_engagement_ratio() -> None:
    """Test posts above both averages count as high engagement."""
    evidence = EvidenceSet(items=(post(10, 1), post(30, 5)))

    metrics = compute_engagement(evidence, EMPTY_SYNTHESIS, Classification())

    assert metrics.avg_score == 20.0
    assert metrics.avg_comments == 3.0
    assert metrics.high_engagement_ratio == 0.5
    # Fewer than five posts adds the low-volume frustration penalty
    assert metrics.frustrated == 10


def test_deterministic() -> None:
    evidence = EvidenceSet(items=(post(12, 3), post(40, 9), post(7, 0)))

    first = compute_engagement(evidence, RICH_SYNTHESIS, Classification())

    assert compute_engagement(evidence, RICH_SYNTHESIS, Classification()) == first


def test_trend_bonus_and_interest_level() -> None:
    assert trend_bonus(Classification(solution_type="ai_solution", problem_domain="fitness")) == 1.6
    assert trend_bonus(Classification()) == 1.0
    assert interest_level(7.6) == "high"
    assert interest_level(6.0) == "medium"
    assert interest_level(5.5) == "low"
