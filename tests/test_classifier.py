"""Tests for dimension classifiers."""

import logging

import pytest

from idea_insight.core import (
    GENERAL,
    AnalysisHints,
    DimensionClassifier,
    IdeaClassifier,
    Taxonomy,
    normalize_idea,
)
from idea_insight.core.taxonomy import CategoryRule


@pytest.fixture
def classifier() -> IdeaClassifier:
    """Create classifier with the bundled taxonomy."""
    return IdeaClassifier(Taxonomy.default())


def test_meditation_app(classifier: IdeaClassifier) -> None:
    """Test a meditation app lands in mental wellness."""
    result = classifier.classify(normalize_idea("meditation app"))

    assert result.problem_domain == "mental_wellness"
    assert result.target_audience == GENERAL
    assert result.solution_type == "mobile_app"


def test_note_taking_for_students(classifier: IdeaClassifier) -> None:
    """Test education beats productivity for student note-taking."""
    result = classifier.classify(normalize_idea("AI-powered note-taking app for students"))

    assert result.problem_domain == "education"
    assert result.target_audience == "students"
    assert result.solution_type == "mobile_app"


def test_hyphenated_word_recovered_by_text_match(classifier: IdeaClassifier) -> None:
    """Test 'blockchain-based' matches crypto through the normalized text."""
    idea = normalize_idea("Blockchain-based voting system")

    assert "blockchainbased" in idea.tokens
    assert "blockchainbased" not in classifier.taxonomy.domains[3].keywords
    # Token-level matching alone misses it
    assert classifier.domain.classify(idea.tokens, "") == GENERAL
    assert classifier.classify(idea).problem_domain == "crypto"


def test_hyphenated_keyword_never_matches_tokens() -> None:
    """Test keywords with hyphens can only match the text."""
    rule = CategoryRule(name="tagged", keywords=frozenset({"note-taking"}))
    dimension = DimensionClassifier("test", (rule,))

    assert dimension.classify(("notetaking",), "notetaking") == GENERAL
    assert dimension.classify(("notetaking",), "note-taking") == "tagged"


def test_text_match_is_word_bounded(classifier: IdeaClassifier) -> None:
    """Test short keywords do not match inside longer words."""
    education = classifier.classify(normalize_idea("Online education for adults"))
    assert education.problem_domain == "education"

    landlords = classifier.classify(normalize_idea("Help landlords maintain buildings"))
    assert landlords.problem_domain == "real_estate"
    assert landlords.solution_type == GENERAL


def test_priority_order_first_match_wins(classifier: IdeaClassifier) -> None:
    """Test earlier categories win when several match."""
    result = classifier.classify(normalize_idea("Meditation app for dog owners"))
    assert result.problem_domain == "mental_wellness"


def test_app_is_not_a_domain_keyword(classifier: IdeaClassifier) -> None:
    """Test generic solution words leave the domain at general."""
    result = classifier.classify(normalize_idea("A totally new app platform"))

    assert result.problem_domain == GENERAL
    assert result.solution_type == "mobile_app"


def test_no_match_defaults_to_general(classifier: IdeaClassifier) -> None:
    """Test unmatched ideas are general on every dimension."""
    result = classifier.classify(normalize_idea("Something completely unusual xyz"))

    assert result.problem_domain == GENERAL
    assert result.target_audience == GENERAL
    assert result.solution_type == GENERAL


@pytest.mark.parametrize(
    "text",
    [
        "meditation app",
        "Smart collar for cats",
        "Marketplace connecting freelance designers with startups",
        "Voice-controlled smart home system for elderly people",
    ],
)
def test_classification_deterministic(classifier: IdeaClassifier, text: str) -> None:
    """Test repeated classification gives identical results."""
    idea = normalize_idea(text)
    assert classifier.classify(idea) == classifier.classify(idea)


def test_hint_fills_general_dimension(classifier: IdeaClassifier) -> None:
    """Test a hint is used when the text says nothing."""
    idea = normalize_idea("A new subscription box idea")
    result = classifier.classify(idea, AnalysisHints(industry="pets"))

    assert result.problem_domain == "pets"
    assert result.hinted_dimensions == ("problem_domain",)


def test_hint_free_text_is_classified(classifier: IdeaClassifier) -> None:
    """Test free-form hint text is mapped to a category."""
    idea = normalize_idea("A new subscription box idea")
    result = classifier.classify(idea, AnalysisHints(industry="Pet care", target_audience="new moms"))

    assert result.problem_domain == "pets"
    assert result.target_audience == "parents"


def test_text_match_beats_hint(classifier: IdeaClassifier, caplog) -> None:
    """Test inferred categories win and the disagreement is logged."""
    idea = normalize_idea("meditation app")

    with caplog.at_level(logging.INFO, logger="idea_insight.core.classifier"):
        result = classifier.classify(idea, AnalysisHints(industry="finance"))

    assert result.problem_domain == "mental_wellness"
    assert result.hinted_dimensions == ()
    assert "disagrees" in caplog.text


def test_unresolvable_hint_ignored(classifier: IdeaClassifier) -> None:
    """Test hints that match nothing are ignored."""
    idea = normalize_idea("A new subscription box idea")
    result = classifier.classify(idea, AnalysisHints(industry="zzzz"))

    assert result.problem_domain == GENERAL
    assert result.hinted_dimensions == ()


def test_blank_hints_skipped(classifier: IdeaClassifier, caplog) -> None:
    """Test whitespace-only hints are treated as absent."""
    idea = normalize_idea("A new subscription box idea")

    with caplog.at_level(logging.INFO, logger="idea_insight.core.classifier"):
        result = classifier.classify(idea, AnalysisHints(industry="   ", target_audience="\t"))

    assert result == classifier.classify(idea)
    assert "Ignoring" not in caplog.text
