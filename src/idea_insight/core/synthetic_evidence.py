"""Synthetic placeholder discussions used when real evidence is thin."""

import hashlib
from dataclasses import dataclass

from idea_insight.core.entities import CommunityTarget, EvidenceItem, Idea, Provenance

KEYWORD_MIN_LENGTH = 4


@dataclass(frozen=True)
class PostTemplate:
    """Title/body pattern with engagement ranges."""

    title: str
    body: str
    score_base: int
    score_span: int
    comments_base: int
    comments_span: int


POST_TEMPLATES: tuple[PostTemplate, ...] = (
    PostTemplate(
        "Has anyone tried {keyword} for {industry}?",
        "Looking for alternatives to existing solutions in {industry}. "
        "Current options seem limited and expensive.",
        15, 85, 3, 20,
    ),
    PostTemplate(
        "Thoughts on {opening}?",
        "Been researching this for a while. Market seems ready but execution "
        "is challenging. Anyone with experience?",
        18, 65, 6, 28,
    ),
    PostTemplate(
        "Why isn't there a good solution for {keywords} yet?",
        "Every existing option I've tried has major limitations. There's "
        "definitely demand but no one has nailed the execution.",
        25, 120, 8, 35,
    ),
    PostTemplate(
        "Just launched our {industry} MVP - early feedback?",
        "After months of development, we're looking for honest feedback. "
        "Trying to solve the {keyword} problem differently.",
        12, 48, 4, 25,
    ),
    PostTemplate(
        "Market research: how much would you pay for a {keyword} solution?",
        "Validating pricing for an upcoming launch. Current alternatives are "
        "either too expensive or too basic.",
        16, 70, 7, 30,
    ),
    PostTemplate(
        "Struggling with {keyword} tools - any recommendations?",
        "Current solutions don't meet our needs. Looking for something more "
        "tailored to {industry}.",
        20, 90, 5, 22,
    ),
    PostTemplate(
        "r/{community}: what's your biggest pain point with {keyword}?",
        "Trying to understand the market better. What problems do you face "
        "daily that tech could solve?",
        30, 110, 12, 40,
    ),
    PostTemplate(
        "Anyone else excited about the potential of {pair}?",
        "Seeing a lot of innovation in this space lately. The market timing "
        "seems right for new solutions.",
        22, 75, 9, 18,
    ),
)


def idea_keywords(idea: Idea, limit: int = 3) -> list[str]:
    """First distinct tokens long enough to be meaningful."""
    keywords: list[str] = []
    for token in idea.tokens:
        if len(token) >= KEYWORD_MIN_LENGTH and token not in keywords:
            keywords.append(token)
        if len(keywords) == limit:
            break
    return keywords


def _stable_number(seed: str, span: int) -> int:
    digest = hashlib.sha256(seed.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) % span


def build_synthetic_items(
    idea: Idea,
    industry: str,
    targets: tuple[CommunityTarget, ...],
    count: int,
    boost: float = 1.0,
) -> list[EvidenceItem]:
    """Create `count` synthetic items spread round-robin over the targets.

    Text comes from the idea keywords, the industry label and the community
    name. Engagement numbers are derived from a hash of the idea, so the same
    idea always gets the same placeholders.

    Args:
        idea: Normalized idea.
        industry: Human-readable industry label.
        targets: Communities to attribute the items to.
        count: Number of items to create.
        boost: Multiplier applied to engagement numbers.

    Returns:
        List of items with synthetic provenance.
    """
    if count <= 0 or not targets:
        return []

    keywords = idea_keywords(idea)
    opening = " ".join(idea.original_text.split()[:4])
    industry = industry or "business"

    items = []
    for i in range(count):
        target = targets[i % len(targets)]
        template = POST_TEMPLATES[i % len(POST_TEMPLATES)]
        values = {
            "keyword": keywords[0] if keywords else "this",
            "keywords": " ".join(keywords) or "this problem",
            "pair": " ".join(keywords[:2]) or "this space",
            "opening": opening,
            "industry": industry,
            "community": target.name,
        }
        seed = f"{idea.normalized_text}|{target.name}|{i}"
        score = template.score_base + _stable_number(seed + "|score", template.score_span)
        comments = template.comments_base + _stable_number(
            seed + "|comments", template.comments_span
        )
        items.append(
            EvidenceItem(
                source_community=target.name,
                title=template.title.format(**values),
                body_text=template.body.format(**values),
                engagement_score=int(score * boost),
                comment_count=int(comments * boost),
                provenance=Provenance.SYNTHETIC,
            )
        )
    return items
