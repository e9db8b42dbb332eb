"""Community target selection."""

from idea_insight.core.entities import GENERAL, Classification, CommunityTarget, SelectionReason
from idea_insight.core.taxonomy import Taxonomy

MAX_COMMUNITIES = 6
MIN_COMMUNITIES = 4
AUDIENCE_SLOTS = 2
SOLUTION_SLOTS = 1


def select_communities(
    classification: Classification,
    tokens: tuple[str, ...],
    taxonomy: Taxonomy,
) -> tuple[CommunityTarget, ...]:
    """Pick a ranked list of communities for a classified idea.

    Domain communities come first, then up to two audience communities and one
    solution-type community. The list is capped at six and padded with generic
    fallback communities up to four. Names are compared case-insensitively.
    """
    selected: list[CommunityTarget] = []
    seen: set[str] = set()

    def add(name: str, reason: SelectionReason) -> bool:
        key = name.lower()
        if not name or key in seen:
            return False
        seen.add(key)
        selected.append(CommunityTarget(name=name, reason=reason))
        return True

    if classification.problem_domain != GENERAL:
        for name in taxonomy.domain_communities(classification.problem_domain, tokens):
            add(name, SelectionReason.DOMAIN_MATCH)

    if classification.target_audience != GENERAL:
        added = 0
        for name in taxonomy.audience_communities(classification.target_audience):
            if added == AUDIENCE_SLOTS:
                break
            if add(name, SelectionReason.AUDIENCE_MATCH):
                added += 1

    if classification.solution_type != GENERAL:
        added = 0
        for name in taxonomy.solution_communities(classification.solution_type):
            if added == SOLUTION_SLOTS:
                break
            if add(name, SelectionReason.SOLUTION_MATCH):
                added += 1

    selected = selected[:MAX_COMMUNITIES]
    seen = {target.name.lower() for target in selected}

    for name in taxonomy.fallback_communities:
        if len(selected) >= MIN_COMMUNITIES:
            break
        add(name, SelectionReason.FALLBACK_BACKFILL)

    return tuple(selected)
