"""Tests for community selection."""

import itertools

import pytest

from idea_insight.core import (
    GENERAL,
    Classification,
    SelectionReason,
    Taxonomy,
    select_communities,
)

TAXONOMY = Taxonomy.default()
REASON_RANK = [
    SelectionReason.DOMAIN_MATCH,
    SelectionReason.AUDIENCE_MATCH,
    SelectionReason.SOLUTION_MATCH,
    SelectionReason.FALLBACK_BACKFILL,
]


def names(targets) -> list[str]:
    return [t.name for t in targets]


def test_meditation_app_communities() -> None:
    """Test domain communities come first, then the solution community."""
    classification = Classification(problem_domain="mental_wellness", solution_type="mobile_app")
    targets = select_communities(classification, ("meditation", "app"), TAXONOMY)

    assert names(targets) == ["Meditation", "mindfulness", "mentalhealth", "selfimprovement", "AppIdeas"]
    assert [t.reason for t in targets] == [SelectionReason.DOMAIN_MATCH] * 4 + [SelectionReason.SOLUTION_MATCH]


def test_all_general_uses_fallback() -> None:
    """Test an unclassified idea gets the generic communities."""
    targets = select_communities(Classification(), (), TAXONOMY)

    assert names(targets) == ["Entrepreneur", "startups", "smallbusiness", "SideProject"]
    assert all(t.reason is SelectionReason.FALLBACK_BACKFILL for t in targets)


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (("smart", "collar", "cats"), ["cats", "CatAdvice", "cattraining", "Entrepreneur"]),
        (("dog", "walking"), ["dogs", "DogTraining", "puppy101", "Entrepreneur"]),
        (("pet", "owners"), ["pets", "dogs", "cats", "AskVet"]),
    ],
)
def test_pet_sub_selection(tokens, expected) -> None:
    """Test cat and dog ideas get species-specific communities."""
    targets = select_communities(Classification(problem_domain="pets"), tokens, TAXONOMY)
    assert names(targets) == expected


def test_truncated_to_six() -> None:
    """Test the list is capped at six entries."""
    classification = Classification(
        problem_domain="mental_wellness",
        target_audience="seniors",
        solution_type="mobile_app",
    )
    targets = select_communities(classification, ("meditation",), TAXONOMY)

    assert len(targets) == 6
    assert names(targets)[4:] == ["AgingParents", "CaregiverSupport"]
    assert SelectionReason.SOLUTION_MATCH not in [t.reason for t in targets]


def test_dedup_is_case_insensitive() -> None:
    """Test 'Fitness' from the audience list duplicates 'fitness'."""
    classification = Classification(problem_domain="fitness", target_audience="athletes")
    targets = select_communities(classification, ("workout",), TAXONOMY)

    assert names(targets) == [
        "fitness", "bodyweightfitness", "loseit", "homegym", "running", "weightroom",
    ]


def test_backfill_skips_duplicates() -> None:
    """Test fallback communities already present are not added twice."""
    taxonomy = Taxonomy.from_mapping({
        "domains": [{"name": "niche", "keywords": ["niche"], "communities": ["startups", "nichesub"]}],
        "fallback_communities": ["Entrepreneur", "startups", "smallbusiness", "SideProject"],
    })
    targets = select_communities(Classification(problem_domain="niche"), (), taxonomy)

    assert names(targets) == ["startups", "nichesub", "Entrepreneur", "smallbusiness"]
    assert [t.reason for t in targets][2:] == [SelectionReason.FALLBACK_BACKFILL] * 2


ALL_COMBINATIONS = list(itertools.product(
    [GENERAL] + [r.name for r in TAXONOMY.domains],
    [GENERAL] + [r.name for r in TAXONOMY.audiences],
    [GENERAL] + [r.name for r in TAXONOMY.solution_types],
))


@pytest.mark.parametrize("domain, audience, solution", ALL_COMBINATIONS)
def test_selection_invariants(domain: str, audience: str, solution: str) -> None:
    """Test size, uniqueness and ordering for every classification."""
    classification = Classification(
        problem_domain=domain, target_audience=audience, solution_type=solution
    )
    targets = select_communities(classification, (), TAXONOMY)
    reasons = [t.reason for t in targets]
    lowered = [name.lower() for name in names(targets)]

    assert 4 <= len(targets) <= 6
    assert len(set(lowered)) == len(lowered)
    assert [REASON_RANK.index(r) for r in reasons] == sorted(REASON_RANK.index(r) for r in reasons)
    assert reasons.count(SelectionReason.AUDIENCE_MATCH) <= 2
    assert reasons.count(SelectionReason.SOLUTION_MATCH) <= 1
    if domain == GENERAL:
        assert SelectionReason.DOMAIN_MATCH not in reasons


def test_selection_is_pure() -> None:
    """Test the same input always gives the same output."""
    classification = Classification(problem_domain="education", target_audience="students")
    tokens = ("notetaking", "students")

    assert select_communities(classification, tokens, TAXONOMY) == select_communities(
        classification, tokens, TAXONOMY
    )
