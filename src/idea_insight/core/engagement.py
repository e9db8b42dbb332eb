"""Engagement-derived market signals.

Scores come only from real discussion items. Synthetic placeholders carry
made-up engagement, so they never influence the numbers; with no real items
the neutral baseline below is used and `posts_analyzed` is 0.
"""

import math

from idea_insight.core.entities import (
    Classification,
    EngagementMetrics,
    EvidenceSet,
    SynthesisContent,
)

BASELINE_AVG_SCORE = 15.0
BASELINE_AVG_COMMENTS = 3.0
BASELINE_ENGAGEMENT_RATIO = 0.3

AI_TREND_BONUS = 1.6
FITNESS_TREND_BONUS = 1.3

FULL_VOLUME_POSTS = 15
DETAILED_BODY_LENGTH = 100
LOW_VOLUME_POSTS = 5


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def trend_bonus(classification: Classification) -> float:
    """Multiplier for categories with growing market interest."""
    if classification.solution_type == "ai_solution":
        return AI_TREND_BONUS
    if classification.problem_domain == "fitness":
        return FITNESS_TREND_BONUS
    return 1.0


def interest_level(overall_score: float) -> str:
    if overall_score > 7.5:
        return "high"
    if overall_score > 5.5:
        return "medium"
    return "low"


def compute_engagement(
    evidence: EvidenceSet,
    synthesis: SynthesisContent,
    classification: Classification,
) -> EngagementMetrics:
    """Score market interest from real engagement, keywords and pain points."""
    posts = evidence.real_items()
    count = len(posts)

    if count:
        avg_score = sum(p.engagement_score for p in posts) / count
        avg_comments = sum(p.comment_count for p in posts) / count
        high = sum(
            1 for p in posts
            if p.engagement_score > avg_score and p.comment_count > avg_comments
        )
        ratio = high / count
        detailed = sum(1 for p in posts if len(p.body_text or "") > DETAILED_BODY_LENGTH) / count
        standout = sum(
            1 for p in posts
            if p.engagement_score > avg_score * 1.5 or p.comment_count > avg_comments * 2
        ) / count
    else:
        avg_score = BASELINE_AVG_SCORE
        avg_comments = BASELINE_AVG_COMMENTS
        ratio = BASELINE_ENGAGEMENT_RATIO
        detailed = 0.0
        standout = 0.0

    pain_count = len(synthesis.pain_points)

    enthusiastic = int(_clamp(
        min(65, round(avg_score * 1.2 + avg_comments * 3)) + round(ratio * 25), 25, 75
    ))
    frustrated = int(_clamp(
        pain_count * 8 + (10 if count < LOW_VOLUME_POSTS else 0), 10, 45
    ))
    mixed = int(_clamp(100 - enthusiastic - frustrated, 15, 60))

    # Reddit scores and comment counts are long-tailed, so compare on a log scale
    score_norm = min(1.0, math.log10(max(1.0, avg_score)) / 2)
    comments_norm = min(1.0, math.log10(max(1.0, avg_comments)) / math.log10(50))
    bonus = trend_bonus(classification)

    engagement = score_norm * 0.4 + comments_norm * 0.3 + standout * 0.3
    volume = min(1.0, count / FULL_VOLUME_POSTS) * 0.6 + detailed * 0.4
    market = (
        min(1.0, len(synthesis.keywords) / 8) * 0.5 + min(1.0, pain_count / 3) * 0.5
    ) * bonus
    base = (engagement * 0.4 + volume * 0.3 + market * 0.3) * 10

    overall = round(_clamp(base, 1.0, 10.0), 1)
    viability = round(_clamp(overall + (bonus - 1.0), 1.0, 10.0), 1)

    return EngagementMetrics(
        posts_analyzed=count,
        avg_score=round(avg_score, 1),
        avg_comments=round(avg_comments, 1),
        high_engagement_ratio=round(ratio, 2),
        enthusiastic=enthusiastic,
        mixed=mixed,
        frustrated=frustrated,
        overall_score=overall,
        viability_score=viability,
        market_interest_level=interest_level(overall),
    )
